"""
Configuration settings for the Streamlit application.
"""

import os

# Page configuration for Streamlit
PAGE_CONFIG = {
    "page_title": "CS Genius - 智能客服知识库",
    "page_icon": "💬",
    "layout": "wide",
    "initial_sidebar_state": "expanded",
}

# API Configuration
# Backend API port is configurable via PORT environment variable (default: 8001)
API_PORT = os.getenv("PORT", "8001")
API_BASE_URL = f"http://localhost:{API_PORT}"  # Backend API URL
API_TIMEOUT = 180  # seconds (3 minutes)

# Form options
APP_OPTIONS = ["辞书", "Test", "阅读", "Kana", "会话", "Web", "活动", "通用"]
FREQUENCY_OPTIONS = ["高", "中", "低"]

# File Upload Settings
KNOWLEDGE_UPLOAD_TYPES = ["json", "png", "jpg", "jpeg", "webp", "docx", "xlsx", "xls"]
AUDIT_UPLOAD_TYPES = ["png", "jpg", "jpeg", "webp"]
