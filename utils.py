"""
Image Editor v1.2 - Utils Module
================================
Streamlit session helpers for the embedding page
"""

import streamlit as st
import asyncio
import base64
import os
import threading
from typing import Optional
import config
from editor_session import EditorSession
from logger import get_logger
from render_scheduler import ManualFrameClock

logger = get_logger(__name__)
_session_lock = threading.Lock()

UPLOAD_MIME_TYPES = {
    '.jpg': 'image/jpeg', '.jpeg': 'image/jpeg', '.png': 'image/png',
    '.webp': 'image/webp', '.gif': 'image/gif'
}

def inject_css():
    st.markdown("""
    <style>
        div[data-testid="column"] { background-color: #f8f9fa; border-radius: 8px; padding: 10px; border: 1px solid #eee; }
        .preview-placeholder { border: 2px dashed #e0e0e0; border-radius: 10px; padding: 40px; text-align: center; color: #888; }
    </style>
    """, unsafe_allow_html=True)

def init_session_state():
    """Initializes all state variables"""
    if 'editor_session' not in st.session_state: st.session_state['editor_session'] = None
    if 'last_box' not in st.session_state: st.session_state['last_box'] = None
    if 'results' not in st.session_state: st.session_state['results'] = None
    if 'load_error' not in st.session_state: st.session_state['load_error'] = None

    for key, value in config.DEFAULT_SETTINGS.items():
        if f'{key}_key' not in st.session_state: st.session_state[f'{key}_key'] = value

def uploaded_file_to_data_uri(uploaded_file) -> str:
    """Same-origin data: URI for an uploaded file"""
    ext = os.path.splitext(uploaded_file.name)[1].lower()
    mime = UPLOAD_MIME_TYPES.get(ext, 'application/octet-stream')
    b64 = base64.b64encode(uploaded_file.getvalue()).decode('utf-8')
    return f"data:{mime};base64,{b64}"

def open_editor_session(reference: str) -> Optional[EditorSession]:
    """Load reference into a new session; stores the failure on error"""
    close_editor_session()
    session = EditorSession(reference, clock=ManualFrameClock(), page_origin=config.PAGE_ORIGIN)
    result = asyncio.run(session.open())
    if session.status != 'ready':
        safe_state_update('load_error', result)
        return None
    safe_state_update('load_error', None)
    safe_state_update('editor_session', session)
    safe_state_update('last_box', None)
    return session

def close_editor_session():
    session = st.session_state.get('editor_session')
    if session is not None:
        session.close()
    safe_state_update('editor_session', None)
    safe_state_update('last_box', None)

def feed_cropper_box(session: EditorSession, box: Optional[dict]) -> bool:
    """
    Replay a cropper box as one pointer drag, then advance one frame

    Returns:
        True if the selection changed
    """
    changed = False
    if box and box != st.session_state.get('last_box'):
        left, top = box['left'], box['top']
        session.pointer_down(left, top)
        session.pointer_move(left + box['width'], top + box['height'])
        session.pointer_up()
        safe_state_update('last_box', dict(box))
        changed = True
    session.scheduler.clock.tick()
    return changed

def safe_state_update(k, v):
    with _session_lock: st.session_state[k] = v
