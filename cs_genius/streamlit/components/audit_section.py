"""
Chat audit section: upload a screenshot, score the reply, save the result.
"""
import streamlit as st
from components.save_form import save_to_knowledge_dialog
from config.settings import AUDIT_UPLOAD_TYPES
from services.api_client import audit_chat
from utils.formatters import band_color, sentiment_color


def render_audit_section():
    """Render the chat audit page."""
    st.subheader("智能质检")

    left, right = st.columns(2)

    with left:
        uploaded = st.file_uploader("上传聊天截图", type=AUDIT_UPLOAD_TYPES)
        if uploaded is not None:
            if uploaded.file_id != st.session_state.audit_file_id:
                # New input resets the previous result
                st.session_state.audit_file_id = uploaded.file_id
                st.session_state.audit_result = None
            st.image(uploaded)

        context_text = st.text_input("额外上下文（可选）")
        busy = st.session_state.audit_loading
        if st.button(
            "AI 正在分析..." if busy else "开始智能质检",
            type="primary",
            disabled=uploaded is None or busy,
        ):
            st.session_state.audit_loading = True
            try:
                with st.spinner("AI 正在分析..."):
                    result = audit_chat(uploaded.getvalue(), context_text or None)
            finally:
                st.session_state.audit_loading = False

            if result["success"]:
                st.session_state.audit_result = result["data"]
            else:
                st.error(result["message"])

    with right:
        result = st.session_state.audit_result
        if not result:
            st.caption("上传截图并开始质检后，结果将显示在这里。")
            return

        score = result["score"]
        st.markdown(
            f"### :{band_color(result['scoreBand'])}[{score:g}/10]  "
            f":{sentiment_color(result['isNegative'])}[用户情绪: {result['sentiment']}]"
        )
        st.markdown(f"**用户问题：** {result['userIssue']}")
        st.markdown(f"**客服原始回复：** {result['agentResponseOriginal']}")
        st.markdown(f"**点评：** {result['critique']}")
        st.markdown("**优化话术：**")
        st.code(result["improvedResponse"], language=None)

        if st.button("💾 保存到知识库"):
            save_to_knowledge_dialog(
                result["userIssue"],
                result["agentResponseOriginal"],
                result["improvedResponse"],
            )
