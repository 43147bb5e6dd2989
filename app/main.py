"""
Streamlit Frontend for Expense Tracker

One page, four parts:
1. Add-expense form
2. Month filter
3. Monthly total
4. Deletable list of the month's expenses

DESIGN PRINCIPLES:
1. The page holds no business rules; validation lives in the ledger
2. Every rejection is shown next to the form in plain language
3. Deleting is one click, there is no undo (the data is personal and small)
"""

import html
from datetime import date

import streamlit as st

from expense_tracker.audit import configure_logging
from expense_tracker.config import get_settings
from expense_tracker.formatting import escape_markdown, format_currency, format_date
from expense_tracker.orchestrator import ExpenseEntryFlow, create_app_components
from expense_tracker.queries import available_months, current_month_key


# Page configuration
st.set_page_config(
    page_title="Expense Tracker",
    page_icon="💸",
    layout="centered",
)

# Custom CSS for the list rows
st.markdown("""
<style>
    .chip {
        padding: 2px 8px;
        border-radius: 999px;
        border: 1px solid #1f2937;
        font-size: 0.85em;
    }
    .muted {
        color: #94a3b8;
    }
    .big-number {
        font-size: 2em;
        font-weight: bold;
    }
</style>
""", unsafe_allow_html=True)


@st.cache_resource
def get_components() -> ExpenseEntryFlow:
    """Get or create application components (cached)."""
    configure_logging(get_settings().app.log_level)
    return create_app_components()


def main():
    """Main application entry point."""
    flow = get_components()
    
    st.title("💸 Expense Tracker")
    st.markdown('<span class="muted">Record expenses and see your monthly total.</span>',
                unsafe_allow_html=True)
    
    render_add_form(flow)
    st.markdown("---")
    
    month = render_month_filter(flow)
    if month is None:
        return
    
    summary = flow.view_month(month)
    render_summary(summary)
    render_expense_list(flow, summary)


def render_add_form(flow: ExpenseEntryFlow):
    """Render the add-expense form."""
    st.subheader("Add Expense")
    
    with st.form("add_expense", clear_on_submit=True):
        col1, col2 = st.columns(2)
        
        with col1:
            description = st.text_input(
                "Description *",
                placeholder="e.g. Monthly groceries",
            )
            amount = st.text_input(
                "Amount *",
                placeholder="0,00",
                help="Use ',' or '.' for cents",
            )
        
        with col2:
            category = st.text_input(
                "Category",
                placeholder="e.g. Food",
                help="Leave blank for 'General'",
            )
            occurred_on = st.date_input(
                "Date *",
                value=date.today(),
            )
        
        submitted = st.form_submit_button("Add", type="primary")
    
    if submitted:
        expense, message = flow.submit(
            description=description,
            amount=amount,
            occurred_on=occurred_on,
            category=category,
        )
        if expense is None:
            st.error(message)
        else:
            st.success(message)


def render_month_filter(flow: ExpenseEntryFlow):
    """Render the month filter. Returns the chosen month key."""
    current = current_month_key()
    months = available_months(flow.store.expenses)
    if current not in months:
        months = sorted(set(months) | {current}, reverse=True)
    
    return st.selectbox(
        "Month",
        options=months,
        index=months.index(current),
    )


def render_summary(summary):
    """Render the monthly total."""
    st.markdown(f"""
    <div>
        <small class="muted">Total for the month</small><br/>
        <span class="big-number">{format_currency(summary.total)}</span>
    </div>
    """, unsafe_allow_html=True)


def render_expense_list(flow: ExpenseEntryFlow, summary):
    """Render the month's expenses with a delete button per row."""
    st.subheader("Expenses this month")
    
    if summary.is_empty:
        st.markdown('<p class="muted">No expenses for this month.</p>',
                    unsafe_allow_html=True)
        return
    
    for expense in summary.expenses:
        left, right, action = st.columns([4, 2, 1])
        
        with left:
            st.markdown(f"**{escape_markdown(expense.description)}**")
            st.markdown(
                f'<span class="chip">{html.escape(expense.category)}</span> · '
                f'<span class="muted">{format_date(expense.occurred_on)}</span>',
                unsafe_allow_html=True,
            )
        
        with right:
            st.markdown(f"**{format_currency(expense.amount)}**")
        
        with action:
            if st.button("×", key=f"delete-{expense.id}", help="Remove"):
                flow.delete(expense.id)
                st.rerun()


if __name__ == "__main__":
    main()
