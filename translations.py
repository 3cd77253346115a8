"""
Image Editor v1.2 - Translations Module
=======================================
UI text strings in multiple languages
"""

TRANSLATIONS = {
    "ua": {
        "title": "🖼️ Редактор зображень",
        "subtitle": "Змініть розмір або обріжте зображення перед вставкою",

        # Source
        "sec_source": "📥 Джерело",
        "lbl_url": "URL зображення",
        "lbl_upload": "Або завантажте файл",
        "btn_open_editor": "🛠 Редагувати",
        "msg_loading": "⏳ Завантаження зображення...",

        # Editor
        "dlg_title": "✂️ Редагування зображення",
        "dlg_desc": "Змініть розмір або обріжте зображення перед вставкою в документ.",
        "tab_resize": "↔️ Розмір",
        "tab_crop": "✂️ Обрізка",
        "lbl_width": "Ширина (px)",
        "lbl_height": "Висота (px)",
        "chk_lock": "🔒 Зберігати пропорції",
        "msg_locked": "Пропорції зафіксовано",
        "msg_unlocked": "Пропорції не зафіксовано",
        "msg_original": "Оригінал: {} × {}",
        "msg_crop_hint": "Виділіть мишею область, яку потрібно залишити.",
        "msg_selection": "Виділення: {} × {} px",
        "btn_skip": "Пропустити редагування",
        "btn_apply": "Застосувати та вставити",

        # Results
        "res_title": "📄 Результат",
        "msg_inserted": "✅ Зображення вставлено ({} × {})",
        "msg_original_used": "ℹ️ Використано оригінальне зображення",

        # Notices
        "err_cors_title": "Неможливо редагувати зовнішнє зображення",
        "err_cors": "Це зображення не можна редагувати через обмеження браузера (CORS). Використано оригінал.",
        "err_too_small_title": "Некоректна область обрізки",
        "err_too_small": "Будь ласка, виділіть більшу область.",
        "err_load_invalid-reference": "❌ Непідтримуване посилання на зображення",
        "err_load_network": "❌ Не вдалося завантажити зображення. Спробуйте ще раз.",
        "err_load_decode": "❌ Файл пошкоджений або не є зображенням",
        "err_load_too-large": "❌ Файл завеликий",

        # Language
        "lang_select": "Мова інтерфейсу / Interface Language",
    },

    "en": {
        "title": "🖼️ Image Editor",
        "subtitle": "Resize or crop an image before inserting it",

        # Source
        "sec_source": "📥 Source",
        "lbl_url": "Image URL",
        "lbl_upload": "Or upload a file",
        "btn_open_editor": "🛠 Edit",
        "msg_loading": "⏳ Loading image...",

        # Editor
        "dlg_title": "✂️ Edit Image",
        "dlg_desc": "Resize or crop your image before inserting it into the document.",
        "tab_resize": "↔️ Resize",
        "tab_crop": "✂️ Crop",
        "lbl_width": "Width (px)",
        "lbl_height": "Height (px)",
        "chk_lock": "🔒 Lock aspect ratio",
        "msg_locked": "Aspect ratio locked",
        "msg_unlocked": "Aspect ratio unlocked",
        "msg_original": "Original: {} × {}",
        "msg_crop_hint": "Click and drag on the image to select the area you want to keep.",
        "msg_selection": "Selection: {} × {} px",
        "btn_skip": "Skip Editing",
        "btn_apply": "Apply & Insert",

        # Results
        "res_title": "📄 Result",
        "msg_inserted": "✅ Image inserted ({} × {})",
        "msg_original_used": "ℹ️ Original image used",

        # Notices
        "err_cors_title": "Cannot edit external image",
        "err_cors": "This image cannot be edited due to browser restrictions (CORS). Using original image.",
        "err_too_small_title": "Invalid crop area",
        "err_too_small": "Please select a larger area to crop.",
        "err_load_invalid-reference": "❌ Unsupported image reference",
        "err_load_network": "❌ Could not load the image. Please retry.",
        "err_load_decode": "❌ The file is corrupted or not an image",
        "err_load_too-large": "❌ The file is too large",

        # Language
        "lang_select": "Interface Language / Мова інтерфейсу",
    }
}

def get_text(lang_code: str) -> dict:
    return TRANSLATIONS.get(lang_code, TRANSLATIONS["en"])

def describe_result(result, lang_code: str = "en") -> str:
    """User-facing message for an EditResult"""
    T = get_text(lang_code)
    if result.kind == "success":
        return T["msg_inserted"].format(result.width, result.height)
    if result.kind == "fallback":
        return f"{T['err_cors_title']}: {T['err_cors']}"
    return f"{T['err_too_small_title']}: {T['err_too_small']}"

def describe_load_failure(failure, lang_code: str = "en") -> str:
    T = get_text(lang_code)
    return T.get(f"err_load_{failure.reason}", T["err_load_network"])
