"""
Image Editor v1.2 - Main Application
====================================
Pick an image, edit it, insert the result
"""

import streamlit as st

import config
import editor_module as editor
import translations as T_DATA
import utils
from translations import describe_load_failure
from logger import get_logger

logger = get_logger(__name__)

st.set_page_config(
    page_title=f"{config.APP_NAME} v{config.APP_VERSION}",
    page_icon="🖼️",
    layout="wide"
)

utils.inject_css()
utils.init_session_state()

T = T_DATA.get_text(st.session_state['lang_code_key'])

# === SIDEBAR ===
with st.sidebar:
    st.selectbox(T['lang_select'], list(T_DATA.TRANSLATIONS.keys()), key='lang_code_key')

# === MAIN ===
st.title(T['title'])
st.caption(T['subtitle'])
c_left, c_right = st.columns([1, 1], gap="large")

with c_left:
    st.subheader(T['sec_source'])
    url = st.text_input(T['lbl_url'])
    uploaded = st.file_uploader(T['lbl_upload'], type=[e.lstrip('.') for e in config.SUPPORTED_UPLOAD_FORMATS])

    if st.button(T['btn_open_editor'], type="primary", disabled=not (url or uploaded)):
        reference = utils.uploaded_file_to_data_uri(uploaded) if uploaded else url.strip()
        with st.spinner(T['msg_loading']):
            utils.open_editor_session(reference)
        st.session_state['results'] = None

    failure = st.session_state.get('load_error')
    if failure is not None:
        st.error(describe_load_failure(failure, st.session_state['lang_code_key']))

if st.session_state.get('editor_session') is not None:
    editor.open_editor_dialog(T)

with c_right:
    st.subheader(T['res_title'])
    results = st.session_state.get('results')
    if results:
        result = results.get('result')
        if result is not None and result.kind == 'success':
            st.success(T['msg_inserted'].format(result.width, result.height))
        else:
            st.info(T['msg_original_used'])
        st.image(results['reference'], use_container_width=True)
    else:
        st.markdown(f'<div class="preview-placeholder">{T["subtitle"]}</div>', unsafe_allow_html=True)
