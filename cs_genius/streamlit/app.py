"""
Main Streamlit application for CS Genius.
Sidebar navigation between the dashboard, knowledge base, chat audit and
smart drafter pages. All data lives in the backend API.
"""
import streamlit as st
from components.audit_section import render_audit_section
from components.dashboard_section import render_dashboard_section
from components.drafter_section import render_drafter_section
from components.knowledge_section import render_knowledge_section
from config.settings import PAGE_CONFIG
from services.api_client import fetch_draft_options

SECTIONS = {
    "📊 数据概览": render_dashboard_section,
    "📚 知识库": render_knowledge_section,
    "🔍 智能质检": render_audit_section,
    "✍️ 话术助手": render_drafter_section,
}

SESSION_DEFAULTS = {
    # Knowledge base page
    "kb_import_mode": False,
    "kb_input_text": "",
    "kb_image_base64": None,
    "kb_image_name": None,
    "kb_upload_key": 0,
    "editing_item_id": None,
    "delete_target_id": None,
    # Chat audit page
    "audit_result": None,
    "audit_file_id": None,
    # Drafter page
    "draft_text": "",
    "draft_keywords": "",
    # Busy flags, one per contract
    "extraction_loading": False,
    "audit_loading": False,
    "draft_loading": False,
}


def init_session_state():
    for key, value in SESSION_DEFAULTS.items():
        if key not in st.session_state:
            st.session_state[key] = value
    if "business_rules" not in st.session_state:
        # Left unset on failure so the next rerun retries
        options = fetch_draft_options()
        if options["success"]:
            st.session_state.tone_options = options["data"]["tones"]
            st.session_state.business_rules = options["data"]["businessRules"]


def main():
    """
    Main application entry point.
    """
    st.set_page_config(**PAGE_CONFIG)
    init_session_state()

    with st.sidebar:
        st.markdown("## CS Genius")
        st.caption("智能客服知识库")
        section = st.radio("导航", list(SECTIONS), label_visibility="collapsed")

    SECTIONS[section]()


if __name__ == "__main__":
    main()
