"""
Uvicorn server runner with configurable logging.

Usage:
    python run.py

Environment variables (set in .env file):
    DEBUG=true - Enable debug logging
    PORT=8001 - Set server port (default: 8001)
    HOST=127.0.0.1 - Set server host (default: 127.0.0.1)

The Streamlit front end expects the API on the same port:
    streamlit run cs_genius/streamlit/app.py
"""

import uvicorn
from cs_genius.config import get_settings

if __name__ == "__main__":
    import os

    # Load settings from .env file
    settings = get_settings()

    # Note: HOST and PORT can be overridden via environment variables
    host = os.getenv("HOST", "127.0.0.1")
    port = int(os.getenv("PORT", "8001"))

    # Set log level based on DEBUG setting from .env
    log_level = "debug" if settings.debug else "info"

    print(f"Starting {settings.app_name} server...")
    print(f"Host: {host}")
    print(f"Port: {port}")
    print(f"Log Level: {log_level}")
    print(f"Docs available at: http://{host}:{port}/docs")

    # No reload: the knowledge base lives in process memory
    uvicorn.run(
        "cs_genius.main:app",
        host=host,
        port=port,
        log_level=log_level,
        access_log=True,
    )
