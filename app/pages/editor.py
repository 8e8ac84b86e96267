"""
Editor Page - caption a photo on the annotation canvas

Features:
- Loads the photo chosen in the search view (or the persisted fallback)
- Toolbar: add text, add shapes, remove selection, download PNG, close
- Click the canvas to select objects, or to place the selection in Move mode
- In-place editing of the selected text
- Layer listing kept in sync with the canvas
"""
import streamlit as st
from streamlit_image_coordinates import streamlit_image_coordinates

from app import config
from app.services.annotation import EditorController, EditorStatus, ShapeKind, TextObject
from app.services.selection import SelectionStore
from app.state import SEARCH_PAGE, EditorState

POINTER_MODES = {"Select": "select", "Move": "move"}


def get_editor_state() -> EditorState:
    """Get editor state from session state"""
    return st.session_state.editor_state


def get_controller(state: EditorState) -> EditorController:
    """Get (or create) the session's editor controller"""
    if state.controller is None:
        state.controller = EditorController(SelectionStore(st.session_state.browser_id))
    return state.controller


def leave_editor(state: EditorState):
    """Tear down the session and forget the selected image"""
    if state.controller is not None:
        state.controller.close()
    state.image_url = None
    state.last_click = None


def render_toolbar(controller: EditorController, state: EditorState) -> bool:
    """
    Render toolbar buttons

    Returns:
        True if the editor was closed
    """
    st.markdown("### Tools")

    if st.button("Add Text", use_container_width=True, key="tool_text"):
        controller.add_text()

    for kind in ShapeKind:
        if st.button(f"Add {kind.value.title()}", use_container_width=True, key=f"tool_{kind.value}"):
            controller.add_shape(kind)

    if st.button(
        "Remove Selected",
        type="secondary",
        disabled=controller.selected is None,
        use_container_width=True,
        key="tool_remove",
    ):
        controller.remove_selected()

    png_bytes = controller.export_png()
    st.download_button(
        label="Download Image",
        data=png_bytes or b"",
        file_name=config.EXPORT_FILENAME,
        mime=config.EXPORT_MIME,
        disabled=png_bytes is None,
        use_container_width=True,
        key="tool_download",
    )

    if st.button("Close Editor", type="primary", use_container_width=True, key="tool_close"):
        leave_editor(state)
        st.session_state.current_page = SEARCH_PAGE
        st.rerun()
        return True

    return False


def render_text_editor(controller: EditorController):
    """Render in-place editor for the selected text object"""
    selected = controller.selected
    if not isinstance(selected, TextObject) or not selected.editable:
        return

    st.markdown("### Edit Text")
    new_content = st.text_input("Text", value=selected.content, key=f"text_{selected.id}")
    if new_content != selected.content:
        controller.edit_selected_text(new_content)
        st.rerun()


def render_canvas(controller: EditorController, state: EditorState):
    """Render the canvas and translate clicks into selection or moves"""
    mode_label = st.radio(
        "Click action",
        list(POINTER_MODES),
        index=list(POINTER_MODES.values()).index(state.pointer_mode),
        horizontal=True,
        key="pointer_mode",
    )
    state.pointer_mode = POINTER_MODES[mode_label]

    surface = controller.surface
    image = surface.render(show_selection=True)
    if image is None:
        return

    value = streamlit_image_coordinates(image, key=f"canvas_{surface.epoch}")
    if not value:
        return

    click = (value["x"], value["y"], value.get("unix_time"))
    # The component keeps returning its last click on every rerun
    if click == state.last_click:
        return
    state.last_click = click

    if state.pointer_mode == "move":
        controller.move_selected_to(click[0], click[1])
    else:
        controller.select_at(click[0], click[1])
    st.rerun()


def render_layer_list(controller: EditorController):
    """Render the canvas layer listing"""
    st.subheader("Canvas Layers:")

    layers = controller.layers
    if not layers:
        st.caption("No layers yet.")
        return

    selected = controller.selected
    for layer in layers:
        marker = "> " if selected is not None and layer.id == selected.id else ""
        st.text(f"{marker}{layer.label}")


def render_editor_page():
    """Main editor page render function"""
    state = get_editor_state()
    controller = get_controller(state)

    st.markdown("<h1 style='text-align: center;'>ADD Caption</h1>", unsafe_allow_html=True)

    controller.open(state.image_url)

    if controller.status == EditorStatus.LOADING:
        with st.spinner("Loading image..."):
            controller.poll(timeout=config.IMAGE_LOAD_TIMEOUT)
    else:
        controller.poll()

    if controller.last_error is not None:
        st.error(f"Could not load image: {controller.last_error.reason}")

    canvas_col, tools_col = st.columns([3, 2])

    # Toolbar runs first so the canvas shows this run's changes
    with tools_col:
        if render_toolbar(controller, state):
            return
        render_text_editor(controller)

    with canvas_col:
        render_canvas(controller, state)

    st.divider()
    render_layer_list(controller)
