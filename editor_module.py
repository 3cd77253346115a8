"""
Image Editor v1.2 - Editor Module
=================================
Image editing dialog with resize and crop
"""

import streamlit as st
from streamlit_cropper import st_cropper
from PIL import Image
import config
import utils
from editor_session import EditorSession
from translations import describe_result
from logger import get_logger

logger = get_logger(__name__)

def _finish(result_reference: str, result=None):
    """Hand the result back to the page and close the dialog"""
    utils.safe_state_update('results', {'reference': result_reference, 'result': result})
    utils.close_editor_session()
    st.rerun()

def _render_resize_tab(session: EditorSession, T: dict):
    resize = session.resize
    locked = st.checkbox(T['chk_lock'], value=resize.aspect_locked)
    if locked != resize.aspect_locked:
        resize.set_aspect_locked(locked)

    c1, c2 = st.columns(2)
    with c1:
        w = st.number_input(T['lbl_width'], min_value=1, max_value=config.MAX_IMAGE_DIMENSION,
                            value=resize.target_width, step=1)
    with c2:
        h = st.number_input(T['lbl_height'], min_value=1, max_value=config.MAX_IMAGE_DIMENSION,
                            value=resize.target_height, step=1)

    if w != resize.target_width:
        resize.set_width(w)
        st.rerun()
    elif h != resize.target_height:
        resize.set_height(h)
        st.rerun()

    img = session.loaded_image
    lock_msg = T['msg_locked'] if resize.aspect_locked else T['msg_unlocked']
    st.caption(f"{lock_msg} • {T['msg_original'].format(img.natural_width, img.natural_height)}")
    st.image(session.preview.present())

def _render_crop_tab(session: EditorSession, T: dict):
    st.caption(T['msg_crop_hint'])
    display = session.loaded_image.image.resize(session.transform.canvas_size, Image.Resampling.LANCZOS)

    try:
        box = st_cropper(
            display,
            realtime_update=True,
            box_color=config.SELECTION_COLOR,
            aspect_ratio=None,
            should_resize_image=False,
            return_type='box',
            key=f"crp_{id(session)}"
        )
    except Exception as e:
        st.error(f"Cropper error: {e}")
        logger.error(f"Cropper failed: {e}")
        box = None

    utils.feed_cropper_box(session, box)
    size = session.selection_size()
    if size:
        st.caption(T['msg_selection'].format(*size))
    if session.preview is not None:
        st.image(session.preview.present())

@st.dialog("✂️ Editor", width="large")
def open_editor_dialog(T: dict):
    """Resize/crop dialog for the active editor session"""
    session = st.session_state.get('editor_session')
    if session is None:
        st.error(T['err_load_network'])
        return

    st.caption(T['dlg_desc'])
    mode = st.radio(
        "mode", config.EDIT_MODES,
        format_func=lambda m: T[f'tab_{m}'],
        horizontal=True, label_visibility="collapsed", key="edit_mode_key"
    )
    if mode != session.mode:
        session.set_mode(mode)
        utils.safe_state_update('last_box', None)

    if session.mode == 'resize':
        _render_resize_tab(session, T)
    else:
        _render_crop_tab(session, T)

    c_skip, c_apply = st.columns(2)
    with c_skip:
        if st.button(T['btn_skip'], use_container_width=True):
            _finish(session.skip())
    with c_apply:
        if st.button(T['btn_apply'], type="primary", use_container_width=True):
            try:
                result = session.apply()
            except Exception as e:
                st.error(f"❌ Editor error: {e}")
                logger.error(f"Apply failed: {e}", exc_info=True)
                return

            if result.kind == 'rejected':
                st.warning(describe_result(result, st.session_state['lang_code_key']))
            elif result.kind == 'fallback':
                st.toast(describe_result(result, st.session_state['lang_code_key']))
                _finish(result.original_reference, result)
            else:
                _finish(result.data_uri, result)
