import streamlit as st

from core.helpers import format_money
from core.state import AppState
from services.expense_service import export_csv, list_transactions
from services.report_service import build_report


def render(db, state: AppState):
    st.write("View and analyze your practice's performance")

    report = build_report(db)

    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Total Revenue", format_money(report["total_revenue"]))
    c2.metric("Total Sessions", report["total_sessions"])
    c3.metric("Avg. Session Value", format_money(report["average_session_value"]))
    c4.metric("Net Profit", format_money(report["net"]))

    st.subheader("Monthly Revenue")
    monthly = report["monthly"]
    if monthly:
        st.bar_chart(
            {"revenue": [float(m["revenue"]) for m in monthly]},
        )
        for m in monthly:
            st.caption(f"{m['month']}: {format_money(m['revenue'])} • {m['sessions']} sessions")
    else:
        st.info("No revenue recorded yet.")

    st.subheader("Session Types")
    for kind, count in report["session_types"].items():
        st.write(f"{kind}: {count}")

    st.subheader("Recent Transactions")
    for t in report["recent_transactions"]:
        st.write(f"{t.date} • {t.description} • {t.type} • {format_money(t.amount)}")

    st.download_button(
        "Export",
        data=export_csv(list_transactions(db)),
        file_name="report.csv",
        mime="text/csv",
    )
