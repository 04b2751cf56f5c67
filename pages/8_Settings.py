"""
Settings Page

Teams, projects, viewer password, report template and factory reset.
"""
import streamlit as st
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from proanaliz.auth import AuthenticationError, ROLE_ADMIN
from proanaliz.data.actions import (
    add_project,
    add_team,
    change_viewer_password,
    delete_project,
    delete_team,
    factory_reset,
    save_templates,
)
from proanaliz.data.loader import load_collections, load_templates
from proanaliz.data.templates import (
    THEME_KEYS,
    active_template,
    toggle_field_visibility,
    update_field_label,
    update_header_title,
    update_show_charts,
    update_theme,
)
from proanaliz.data.validation import ValidationError
from proanaliz.ui.layout import require_session, section_header
from proanaliz.logging_config import setup_logging
from proanaliz.ui.state import get_auth_service, get_state, init_state


st.set_page_config(page_title="Ayarlar", page_icon="⚙️", layout="wide")

setup_logging()
init_state()

THEME_LABELS = {
    "primary": "Ana Renk",
    "secondary": "İkincil Renk",
    "accent": "Vurgu Rengi",
    "imalat": "İmalat",
    "kaynak": "Kaynak",
    "temizlik": "Temizlik",
}


def render_named_list(title: str, df, add_fn, delete_fn, key: str):
    section_header(title)
    with st.form(f"add_{key}", clear_on_submit=True):
        name = st.text_input("Ad")
        if st.form_submit_button("Ekle"):
            try:
                if add_fn(name) is None:
                    st.error("Kayıt sırasında bir hata oluştu.")
                else:
                    st.rerun()
            except ValidationError as e:
                st.error(f"HATA: {e}")

    for _, row in df.iterrows():
        c1, c2 = st.columns([4, 1])
        c1.write(row["name"])
        if c2.button("Sil", key=f"delete_{key}_{row['id']}"):
            if delete_fn(row["id"]):
                st.rerun()
            st.error("Silme işlemi başarısız.")


def render_viewer_password():
    section_header("İzleyici Şifresi")
    with st.form("viewer_password", clear_on_submit=True):
        password = st.text_input("Yeni şifre", type="password")
        if st.form_submit_button("Güncelle"):
            try:
                if change_viewer_password(get_auth_service(), get_state("session_token"), password):
                    st.success("İzleyici şifresi güncellendi.")
                else:
                    st.error("Şifre kaydedilemedi.")
            except (ValidationError, AuthenticationError) as e:
                st.error(str(e))


def render_template_editor():
    templates = load_templates()
    template = active_template(templates)

    section_header("Rapor Şablonu", template.name)

    title = st.text_input("Rapor başlığı", value=template.header_title)
    show_charts = st.checkbox("Grafikleri göster", value=template.show_charts)

    st.markdown("**Alanlar**")
    edited = templates
    for f in template.fields:
        c1, c2 = st.columns([1, 4])
        visible = c1.checkbox("Göster", value=f.visible, key=f"field_visible_{f.id}")
        label = c2.text_input(f.id, value=f.label, key=f"field_label_{f.id}")
        if visible != f.visible:
            edited = toggle_field_visibility(edited, f.id)
        if label != f.label:
            edited = update_field_label(edited, f.id, label)

    st.markdown("**Tema**")
    cols = st.columns(len(THEME_KEYS))
    colors = {}
    for i, key in enumerate(THEME_KEYS):
        colors[key] = cols[i].color_picker(THEME_LABELS[key], value=getattr(template.theme, key),
                                           key=f"theme_{key}")

    if st.button("Şablonu Kaydet"):
        edited = update_header_title(edited, title)
        edited = update_show_charts(edited, show_charts)
        edited = update_theme(edited, **colors)
        if save_templates(edited):
            st.success("Şablon kaydedildi.")
        else:
            st.error("Şablon kaydedilemedi.")


def render_factory_reset():
    section_header("Fabrika Ayarlarına Dön",
                   "Tüm üretim, bütçe, ekip ve proje kayıtları kalıcı olarak silinir.")
    with st.form("factory_reset"):
        password = st.text_input("Yönetici şifresi", type="password")
        confirmed = st.checkbox("Bu işlemin geri alınamayacağını anlıyorum.")
        if st.form_submit_button("Tüm Verileri Sil"):
            if not confirmed:
                st.warning("Önce onay kutusunu işaretleyin.")
                return
            try:
                removed = factory_reset(get_auth_service(), get_state("session_token"), password)
            except AuthenticationError as e:
                st.error(str(e))
                return
            st.success(f"{sum(removed.values()):,} kayıt silindi.")


def main():
    require_session(allowed_roles=(ROLE_ADMIN,))
    st.title("Ayarlar")

    data = load_collections()

    col1, col2 = st.columns(2)
    with col1:
        render_named_list("Ekipler", data.teams, add_team, delete_team, "team")
    with col2:
        render_named_list("Projeler", data.projects, add_project, delete_project, "project")

    st.markdown("---")
    render_template_editor()

    st.markdown("---")
    render_viewer_password()

    st.markdown("---")
    render_factory_reset()


if __name__ == "__main__":
    main()
