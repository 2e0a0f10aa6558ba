"""
Dashboard section: headline numbers, distributions and recent items.
"""
import streamlit as st
from services.api_client import fetch_dashboard


def render_dashboard_section():
    """Render the dashboard page."""
    st.subheader("数据概览")

    result = fetch_dashboard()
    if not result["success"]:
        st.error(result["message"])
        return

    data = result["data"]
    stats = data["stats"]

    cols = st.columns(4)
    cols[0].metric("知识库总条目", stats["total"])
    cols[1].metric("覆盖产品 (App)", stats["apps"])
    cols[2].metric("本周新增问题", stats["recent"])
    cols[3].metric("活跃分类数", stats["categories"])

    chart_left, chart_right = st.columns(2)
    with chart_left:
        st.markdown("**各产品问题分布**")
        if data["appDistribution"]:
            st.bar_chart(data["appDistribution"], x="name", y="count")
        else:
            st.caption("暂无数据")

    with chart_right:
        st.markdown("**热门问题分类 (Top 8)**")
        if data["categoryDistribution"]:
            st.bar_chart(data["categoryDistribution"], x="name", y="count")
        else:
            st.caption("暂无数据")

    st.markdown("**最近更新**")
    recent = data["recentItems"]
    if not recent:
        st.caption("暂无条目")
    for item in recent:
        st.markdown(
            f"- **{item['question']}**  \n"
            f"  {item['app']} · {item['category']} · {item['lastUpdated']}"
        )
