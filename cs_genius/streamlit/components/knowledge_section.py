"""
Knowledge base section: import panel, filters and the editable item table.
"""
import streamlit as st
from config.settings import APP_OPTIONS, KNOWLEDGE_UPLOAD_TYPES
from services.api_client import (
    delete_item,
    export_backup,
    extract_knowledge,
    fetch_categories,
    list_items,
    prepare_document,
    update_optimized_answer,
)


def render_knowledge_section():
    """Render the knowledge base page."""
    header_left, header_right = st.columns([3, 2])
    header_left.subheader("知识库管理")

    with header_right:
        backup = export_backup()
        if backup["success"]:
            filename, content = backup["data"]
            st.download_button(
                "📥 下载备份 (JSON)",
                data=content,
                file_name=filename,
                mime="application/json",
            )
        toggle_label = "取消导入" if st.session_state.kb_import_mode else "➕ 添加新知识"
        if st.button(toggle_label):
            st.session_state.kb_import_mode = not st.session_state.kb_import_mode
            st.rerun()

    if st.session_state.kb_import_mode:
        render_import_panel()

    render_filters_and_table()


def render_import_panel():
    """Upload or paste material and run extraction."""
    with st.container(border=True):
        st.markdown("**导入数据**")
        st.caption("支持 JSON 备份还原、文档解析或截图识别")

        uploaded = st.file_uploader(
            "上传文件",
            type=KNOWLEDGE_UPLOAD_TYPES,
            key=f"kb_upload_{st.session_state.kb_upload_key}",
        )
        if uploaded is not None:
            handle_upload(uploaded)

        if st.session_state.kb_image_base64:
            st.caption(f"已附加图片：{st.session_state.kb_image_name}")

        st.session_state.kb_input_text = st.text_area(
            "文本内容",
            value=st.session_state.kb_input_text,
            height=200,
            placeholder="此处显示解析后的文本内容... 如果您上传的是 JSON 备份文件，数据将直接导入，无需通过 AI 分析。",
        )

        ready = bool(st.session_state.kb_input_text.strip() or st.session_state.kb_image_base64)
        busy = st.session_state.extraction_loading
        if st.button(
            "AI 正在分析..." if busy else "✨ 开始 AI 分析",
            type="primary",
            disabled=not ready or busy,
        ):
            run_extraction()


def handle_upload(uploaded):
    """Send an upload to the backend for pre-processing."""
    result = prepare_document(
        uploaded.name, uploaded.getvalue(), st.session_state.kb_input_text
    )
    # Reset the uploader so the same file is not processed on every rerun
    st.session_state.kb_upload_key += 1

    if not result["success"]:
        st.error(result["message"])
        return

    prepared = result["data"]
    if prepared["kind"] == "backup":
        imported = prepared["imported"]
        st.toast(f"成功导入 {imported['imported']} 条知识条目！")
        st.session_state.kb_import_mode = False
    elif prepared["kind"] == "image":
        st.session_state.kb_image_base64 = prepared["imageBase64"]
        st.session_state.kb_image_name = prepared["fileName"]
    else:
        st.session_state.kb_input_text = prepared["contextText"]
    st.rerun()


def run_extraction():
    """Run extraction and store the results."""
    st.session_state.extraction_loading = True
    try:
        with st.spinner("AI 正在分析..."):
            result = extract_knowledge(
                st.session_state.kb_input_text,
                st.session_state.kb_image_base64,
                save=True,
            )
    finally:
        st.session_state.extraction_loading = False

    if result["success"]:
        count = len(result["data"]["items"])
        st.session_state.kb_import_mode = False
        st.session_state.kb_input_text = ""
        st.session_state.kb_image_base64 = None
        st.session_state.kb_image_name = None
        st.toast(f"已提取 {count} 条知识条目")
        st.rerun()
    else:
        st.error(result["message"])


def render_filters_and_table():
    """Search, filter and render the item table."""
    categories = fetch_categories()
    category_options = categories["data"]["categories"] if categories["success"] else ["All"]

    col_search, col_app, col_category = st.columns([3, 1, 1])
    search = col_search.text_input("搜索", placeholder="搜索问题、相似问法或回答...")
    app = col_app.selectbox("App", ["All"] + APP_OPTIONS)
    category = col_category.selectbox("分类", category_options)

    result = list_items(search=search, app=app, category=category)
    if not result["success"]:
        st.error(result["message"])
        return

    data = result["data"]
    st.caption(f"共 {data['total']} / {data['collectionSize']} 条")

    for item in data["items"]:
        render_item(item)


def render_item(item: dict):
    """One knowledge item with inline edit and delete."""
    item_id = item["id"]
    with st.expander(f"{item['question']}  ·  {item['app']} / {item['category']} / {item['frequency']}"):
        if item.get("alternativeQuestions"):
            st.markdown("**相似问法：** " + "；".join(item["alternativeQuestions"]))
        st.markdown(f"**原始回答：** {item['answer']}")

        if st.session_state.editing_item_id == item_id:
            new_value = st.text_area(
                "优化话术", value=item.get("optimizedAnswer") or "", key=f"edit_{item_id}"
            )
            col_save, col_cancel = st.columns(2)
            if col_save.button("保存", key=f"save_{item_id}"):
                result = update_optimized_answer(item_id, new_value)
                if not result["success"]:
                    st.toast(result["message"])
                st.session_state.editing_item_id = None
                st.rerun()
            if col_cancel.button("取消", key=f"cancel_{item_id}"):
                st.session_state.editing_item_id = None
                st.rerun()
        else:
            st.markdown(f"**优化话术：** {item.get('optimizedAnswer') or '暂无'}")
            if st.button("✏️ 编辑话术", key=f"start_edit_{item_id}"):
                st.session_state.editing_item_id = item_id
                st.rerun()

        st.caption(f"更新于 {item['lastUpdated']}")

        if st.session_state.delete_target_id == item_id:
            st.warning("确定要删除这条知识吗？此操作无法撤销。")
            col_yes, col_no = st.columns(2)
            if col_yes.button("确认删除", key=f"confirm_delete_{item_id}", type="primary"):
                result = delete_item(item_id)
                if not result["success"]:
                    st.toast(result["message"])
                if st.session_state.editing_item_id == item_id:
                    st.session_state.editing_item_id = None
                st.session_state.delete_target_id = None
                st.rerun()
            if col_no.button("取消", key=f"cancel_delete_{item_id}"):
                st.session_state.delete_target_id = None
                st.rerun()
        elif st.button("🗑️ 删除", key=f"delete_{item_id}"):
            st.session_state.delete_target_id = item_id
            st.rerun()
