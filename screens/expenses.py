import streamlit as st

from core.helpers import clean_amount, flash, format_money
from core.state import AppState
from core.time_utils import parse_date
from services.expense_service import (
    CATEGORIES,
    TRANSACTION_TYPES,
    add_transaction,
    available_months,
    empty_transaction_form,
    export_csv,
    filter_transactions,
    ledger_totals,
    list_transactions,
)

FORM_KEY = "show_transaction_form"


def _render_form(db):
    if st.button("Back to Ledger"):
        st.session_state[FORM_KEY] = False
        st.rerun()

    defaults = empty_transaction_form()
    with st.form("transaction_form"):
        tx_type = st.radio(
            "Transaction Type *", TRANSACTION_TYPES,
            index=TRANSACTION_TYPES.index(defaults["type"]),
            format_func=str.capitalize, horizontal=True,
        )
        amount = st.text_input("Amount *", value=defaults["amount"], placeholder="0.00")
        description = st.text_input("Description *", value=defaults["description"])
        category = st.selectbox("Category *", CATEGORIES, index=CATEGORIES.index(defaults["category"]))
        tx_date = st.date_input("Date", value=parse_date(defaults["date"]))
        submitted = st.form_submit_button("Add Transaction", type="primary")

    if submitted:
        try:
            add_transaction(db, {
                "type": tx_type,
                "amount": clean_amount(amount),
                "description": description,
                "category": category,
                "date": tx_date,
            })
        except ValueError as e:
            st.error(str(e))
            return
        st.session_state[FORM_KEY] = False
        flash("Transaction added.")
        st.rerun()


def render(db, state: AppState):
    if st.session_state.get(FORM_KEY):
        _render_form(db)
        return

    if st.button("Add Transaction", type="primary"):
        st.session_state[FORM_KEY] = True
        st.rerun()

    transactions = list_transactions(db)

    c1, c2 = st.columns(2)
    with c1:
        tx_filter = st.selectbox("Type", ["all", "income", "expense"], format_func=str.capitalize)
    with c2:
        month = st.selectbox("Month", ["all"] + available_months(transactions))

    shown = filter_transactions(transactions, tx_filter, None if month == "all" else month)
    totals = ledger_totals(filter_transactions(transactions, "all", None if month == "all" else month))

    m1, m2, m3 = st.columns(3)
    m1.metric("Total Income", format_money(totals.income))
    m2.metric("Total Expenses", format_money(totals.expenses))
    m3.metric("Net Profit", format_money(totals.net))

    st.subheader("Transactions")
    if not shown:
        st.info("No transactions found.")
    for t in shown:
        sign = "+" if t.type == "income" else "-"
        left, right = st.columns([4, 1])
        with left:
            st.write(f"**{t.description}**")
            st.caption(f"{t.date} • {t.category}")
        with right:
            st.write(f"{sign}{format_money(t.amount)}")

    st.download_button(
        "Export CSV",
        data=export_csv(shown),
        file_name="transactions.csv",
        mime="text/csv",
    )
