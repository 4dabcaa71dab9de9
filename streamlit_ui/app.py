# app.py
import logging

import streamlit as st

from receipt_admin.client import ReceiptApiClient
from receipt_admin.config import BACKEND_URL, LOG_LEVEL, MESSAGES, PAGE_SIZES
from receipt_admin.formatters import (
    display_name,
    format_currency,
    format_date,
    receipt_no_label,
    to_input_date,
    username_label,
)
from receipt_admin.views import AMOUNT_FIELDS

from host import ToastNotifier, build_views

logging.basicConfig(level=LOG_LEVEL.upper())

st.set_page_config(
    page_title="BARİN MUHASEBE",
    layout="wide",
    page_icon="🧾",
)


# ============================================================
# SESSION
# ============================================================
def _session():
    if "views" not in st.session_state:
        notifier = ToastNotifier()
        st.session_state["notifier"] = notifier
        st.session_state["views"] = build_views(ReceiptApiClient(BACKEND_URL), notifier)
    return st.session_state["views"], st.session_state["notifier"]


views, notifier = _session()


# ============================================================
# SIDEBAR → NAVIGATION
# ============================================================
st.sidebar.header("🧾 BARİN MUHASEBE")
page = st.sidebar.radio("Sayfa", list(views.keys()))
st.sidebar.caption(f"API: {BACKEND_URL}")

previous = st.session_state.get("active_page")
if page != previous:
    if previous:
        views[previous].unmount()
    with st.spinner("Yükleniyor..."):
        views[page].mount()
    st.session_state["active_page"] = page


# ============================================================
# DASHBOARD
# ============================================================
def render_dashboard(view):
    col_title, col_export = st.columns([4, 1])
    col_title.title("Dashboard")
    col_title.caption("BARİN MUHASEBE sistemi genel bakış")
    col_export.button("📥 Excel İndir", key="export_all", on_click=view.export_all)
    with col_export:
        view.downloader.render("download_all")

    state = view.render_state()
    if state == "loading":
        st.caption("⏳ Yükleniyor...")
        return
    if state == "empty":
        st.info(f"🧾 {MESSAGES['stats_empty']}")
        return

    stats = view.stats
    for col, (title, value) in zip(st.columns(4), view.summary_cards()):
        col.metric(title, value)

    left, right = st.columns(2)
    with left:
        st.subheader("📄 Son Fişler")
        for r in stats.recentReceipts:
            with st.container(border=True):
                a, b = st.columns(2)
                a.markdown(f"**Fiş #{receipt_no_label(r.receipt_no)}**")
                a.caption(username_label(r.telegram_username))
                b.markdown(f"**{format_currency(r.total_amount)}**")
                b.caption(format_date(r.created_at))

    with right:
        st.subheader("👥 Kullanıcı İstatistikleri")
        for u in stats.userStats:
            with st.container(border=True):
                a, b = st.columns(2)
                a.markdown(f"**{display_name(u)}**")
                a.caption(f"{u.receipt_count} fiş")
                b.markdown(f"**{format_currency(u.total_amount)}**")

    st.subheader("📈 Aylık İstatistikler")
    st.dataframe(
        [
            {
                "Ay": m.month,
                "Fiş Sayısı": m.count,
                "Toplam Tutar": format_currency(m.total_amount),
                "TOPKDV": format_currency(m.topKdvAmount),
                "KDV'siz TUTAR": format_currency(m.netAmount),
            }
            for m in stats.monthlyStats
        ],
        hide_index=True,
        use_container_width=True,
    )


# ============================================================
# RECEIPTS → callbacks
# ============================================================
def _on_text_filter(view, field, key):
    view.set_filter(field, st.session_state[key])


def _on_date_filter(view, field, key):
    value = st.session_state[key]
    view.set_filter(field, value.isoformat() if value else "")


def _editor_prefix(view):
    return f"edit_{view.editor.receipt.id}_"


def _sync_editor_widgets(view):
    prefix = _editor_prefix(view)
    data = view.editor.data
    st.session_state[f"{prefix}receipt_date"] = to_input_date(data["receipt_date"])
    st.session_state[f"{prefix}receipt_no"] = data["receipt_no"]
    for field in AMOUNT_FIELDS:
        st.session_state[f"{prefix}{field}"] = data[field]


def _on_edit(view, receipt):
    view.open_editor(receipt)
    _sync_editor_widgets(view)


def _on_editor_change(view, field):
    value = st.session_state[f"{_editor_prefix(view)}{field}"]
    if field == "receipt_date":
        value = value.isoformat() if value else ""
    view.editor.set_field(field, value)
    _sync_editor_widgets(view)


def _on_editor_cancel(view):
    view.close_editor()


def _on_delete_request(receipt_id):
    st.session_state["confirm_delete"] = receipt_id


def _on_delete_confirm(view, receipt_id):
    def confirmed(_message):
        return st.session_state.pop("confirm_delete", None) == receipt_id

    view.delete_record(receipt_id, confirmed)


def _on_delete_abort():
    st.session_state.pop("confirm_delete", None)


# ============================================================
# RECEIPTS → rendering
# ============================================================
def render_filters(view):
    f = view.filters
    c1, c2, c3, c4 = st.columns(4)
    c1.date_input(
        "📅 Başlangıç Tarihi",
        value=to_input_date(f.start_date),
        key="filter_start",
        on_change=_on_date_filter,
        args=(view, "start_date", "filter_start"),
    )
    c2.date_input(
        "📅 Bitiş Tarihi",
        value=to_input_date(f.end_date),
        key="filter_end",
        on_change=_on_date_filter,
        args=(view, "end_date", "filter_end"),
    )
    c3.text_input(
        "👤 Kullanıcı",
        value=f.user,
        placeholder="Kullanıcı ara...",
        key="filter_user",
        on_change=_on_text_filter,
        args=(view, "user", "filter_user"),
    )
    c4.selectbox(
        "Sayfa Başına",
        PAGE_SIZES,
        index=PAGE_SIZES.index(f.limit),
        key="filter_limit",
        on_change=_on_text_filter,
        args=(view, "limit", "filter_limit"),
    )


def render_table(view):
    headers = ["Tarih", "Fiş No", "Toplam", "TOPKDV", "KDV'siz TUTAR", "Gönderen", "İşlemler"]
    widths = [2, 2, 2, 2, 2, 3, 2]
    for col, title in zip(st.columns(widths), headers):
        col.markdown(f"**{title}**")

    if not view.receipts:
        st.info(MESSAGES["list_empty"])
        return

    pending_delete = st.session_state.get("confirm_delete")
    for r in view.receipts:
        cols = st.columns(widths)
        cols[0].write(format_date(r.receipt_date))
        cols[1].write(receipt_no_label(r.receipt_no))
        cols[2].write(format_currency(r.total_amount))
        cols[3].write(format_currency(r.top_kdv_amount))
        cols[4].write(format_currency(r.net_amount))
        cols[5].write(display_name(r))
        edit_col, delete_col = cols[6].columns(2)
        edit_col.button("✏️", key=f"edit_{r.id}", help="Düzenle", on_click=_on_edit, args=(view, r))
        delete_col.button("🗑️", key=f"delete_{r.id}", help="Sil", on_click=_on_delete_request, args=(r.id,))

        if pending_delete == r.id:
            st.warning(MESSAGES["delete_confirm"])
            yes, no = st.columns([1, 6])
            yes.button("Evet, sil", key=f"delete_yes_{r.id}", on_click=_on_delete_confirm, args=(view, r.id))
            no.button("İptal", key=f"delete_no_{r.id}", on_click=_on_delete_abort)


def render_pagination(view):
    if not view.show_pagination:
        return
    info, prev_col, pos, next_col = st.columns([6, 1, 1, 1])
    info.caption(view.page_caption())
    prev_col.button("Önceki", disabled=not view.has_previous, on_click=view.go_previous)
    pos.write(f"{view.filters.page} / {view.total_pages}")
    next_col.button("Sonraki", disabled=not view.has_next, on_click=view.go_next)


def render_editor(view):
    if not view.editor_open or view.editor.receipt is None:
        return
    prefix = _editor_prefix(view)
    with st.container(border=True):
        st.subheader("📝 Fiş Düzenle")
        st.date_input(
            "📅 Tarih",
            key=f"{prefix}receipt_date",
            on_change=_on_editor_change,
            args=(view, "receipt_date"),
        )
        st.text_input(
            "Fiş No",
            key=f"{prefix}receipt_no",
            on_change=_on_editor_change,
            args=(view, "receipt_no"),
        )
        labels = {
            "total_amount": "Toplam Tutar (TL)",
            "kdv_10_amount": "KDV %10 Tutar (TL)",
            "top_kdv_amount": "Toplam KDV (TL)",
            "net_amount": "Net Tutar (TL)",
        }
        for field in AMOUNT_FIELDS:
            st.number_input(
                labels[field],
                step=0.01,
                format="%.2f",
                key=f"{prefix}{field}",
                on_change=_on_editor_change,
                args=(view, field),
            )
        cancel, save = st.columns([1, 1])
        cancel.button("İptal", key=f"{prefix}cancel", on_click=_on_editor_cancel, args=(view,))
        save.button("💾 Kaydet", key=f"{prefix}save", type="primary", on_click=view.editor.submit)


def render_receipts(view):
    col_title, col_export = st.columns([4, 1])
    col_title.title("Fişler")
    col_title.caption("Tüm fişleri görüntüle ve yönet")
    col_export.button("📥 Excel İndir", key="export_filtered", on_click=view.export_filtered)
    with col_export:
        view.downloader.render("download_filtered")

    render_filters(view)
    render_editor(view)
    if view.loading:
        st.caption("⏳ Yükleniyor...")
    else:
        render_table(view)
    render_pagination(view)


if page == "Dashboard":
    render_dashboard(views[page])
else:
    render_receipts(views[page])

notifier.flush()
