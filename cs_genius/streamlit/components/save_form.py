"""
Save-to-knowledge dialog shared by the audit and drafter pages.
"""
import streamlit as st
from config.settings import APP_OPTIONS, FREQUENCY_OPTIONS
from services.api_client import add_items


@st.dialog("保存到知识库")
def save_to_knowledge_dialog(initial_question: str, initial_answer: str, initial_optimized: str | None = None):
    """
    Pre-filled form that adds one item to the knowledge base.

    Args:
        initial_question: Suggested question text
        initial_answer: Suggested original answer
        initial_optimized: Suggested optimized answer, defaults to the answer
    """
    with st.form("save_to_knowledge_form"):
        col_app, col_category = st.columns(2)
        app = col_app.selectbox("App 名称", APP_OPTIONS, index=APP_OPTIONS.index("通用"))
        category = col_category.text_input("问题分类", value="通用")
        question = st.text_input("标准问题", value=initial_question)
        answer = st.text_area("原始回答", value=initial_answer, height=80)
        optimized = st.text_area(
            "优化话术", value=initial_optimized or initial_answer, height=140
        )
        frequency = st.radio("出现频率", FREQUENCY_OPTIONS, index=1, horizontal=True)

        submitted = st.form_submit_button("保存条目", type="primary")

    if submitted:
        if not question.strip() or not answer.strip():
            st.warning("标准问题和原始回答不能为空。")
            return

        result = add_items([{
            "app": app,
            "category": category,
            "question": question,
            "answer": answer,
            "optimizedAnswer": optimized,
            "frequency": frequency,
            "alternativeQuestions": [],
        }])
        if result["success"]:
            st.toast("已保存到知识库")
            st.rerun()
        else:
            st.error(result["message"])
