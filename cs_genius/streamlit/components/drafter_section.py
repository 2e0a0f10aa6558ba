"""
Smart drafter section: keywords, tone and business rules in, reply out.
"""
import streamlit as st
from components.save_form import save_to_knowledge_dialog
from services.api_client import generate_draft


def render_drafter_section():
    """Render the drafter page."""
    st.subheader("智能话术助手")
    st.caption("结合常用业务规则库，输入关键词，秒级生成专业回复。")

    if "business_rules" not in st.session_state:
        st.error("无法加载话术选项，请确认后端服务已启动。")
        return

    left, right = st.columns(2)

    with left:
        keywords = st.text_area("关键点 / 问题描述", height=120)
        tone = st.selectbox("语气", st.session_state.tone_options)
        render_rules_editor()

        busy = st.session_state.draft_loading
        if st.button(
            "生成中..." if busy else "✨ 生成回复",
            type="primary",
            disabled=not keywords.strip() or busy,
        ):
            st.session_state.draft_loading = True
            try:
                with st.spinner("生成中..."):
                    result = generate_draft(keywords, tone, st.session_state.business_rules)
            finally:
                st.session_state.draft_loading = False

            if result["success"] and result["data"]["available"]:
                st.session_state.draft_text = result["data"]["draft"]
                st.session_state.draft_keywords = keywords
            elif result["success"]:
                st.warning("无法生成草稿，请重试。")
            else:
                st.error(result["message"])

    with right:
        draft = st.session_state.draft_text
        if not draft:
            st.caption("生成的回复将显示在这里。")
            return

        st.code(draft, language=None)
        if st.button("💾 保存到知识库"):
            save_to_knowledge_dialog(st.session_state.draft_keywords, draft, draft)


def render_rules_editor():
    """Editable list of business rules."""
    st.markdown("**业务规则库**")
    rules = st.session_state.business_rules
    if not rules:
        st.caption("暂无规则")

    for index, rule in enumerate(rules):
        col_text, col_remove = st.columns([6, 1])
        col_text.markdown(f"- {rule}")
        if col_remove.button("🗑️", key=f"remove_rule_{index}"):
            st.session_state.business_rules = rules[:index] + rules[index + 1:]
            st.rerun()

    with st.form("add_rule_form", clear_on_submit=True):
        new_rule = st.text_input("添加规则", placeholder="例如：退款需在 14 天内申请")
        if st.form_submit_button("添加") and new_rule.strip():
            st.session_state.business_rules = rules + [new_rule.strip()]
            st.rerun()
