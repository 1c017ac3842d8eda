"""Streamlit frontend for UGC Studio."""

import base64

import streamlit as st

from frontend.client import (
    ADDITIONAL_TOGGLES,
    DEFAULT_SETTINGS,
    ORIENTATION_OPTIONS,
    QUALITY_OPTIONS,
    TONE_OPTIONS,
    VISUAL_STYLES,
    StudioClientError,
    build_image_payload,
    build_scenario_payload,
    create_thread,
    request_images,
    request_scenarios,
)

# Page configuration
st.set_page_config(
    page_title="UGC Studio",
    page_icon="📸",
    layout="wide",
)


# ============================================================================
# Session Management
# ============================================================================


def init_state():
    """Seed per-browser-session state once."""
    defaults = {
        "thread_id": None,
        "thread_error": None,
        "scenarios": [],
        "selected_ids": set(),
        "images": [],
        "scenario_error": None,
        "image_error": None,
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value


def open_thread():
    """Open the assistant thread used for every scenario request."""
    try:
        st.session_state.thread_id = create_thread()
        st.session_state.thread_error = None
    except StudioClientError as e:
        st.session_state.thread_error = str(e)


def get_or_create_thread():
    if st.session_state.thread_id is None and st.session_state.thread_error is None:
        with st.spinner("Connecting to the assistant..."):
            open_thread()
    return st.session_state.thread_id


# ============================================================================
# UI Components
# ============================================================================


def render_sidebar() -> dict:
    """Render generation settings and return them in wire format."""
    with st.sidebar:
        st.header("📸 UGC Studio")
        st.caption("Product photo in, scroll-stopping content out")

        if st.session_state.thread_error:
            st.error(st.session_state.thread_error)
            if st.button("Retry connection"):
                st.session_state.thread_error = None
                open_thread()
                st.rerun()
        elif st.session_state.thread_id:
            st.caption(f"Assistant thread: `{st.session_state.thread_id}`")

        st.divider()
        st.subheader("Generation Settings")

        settings = {
            "visualStyle": st.selectbox("Visual style", VISUAL_STYLES),
            "tone": st.selectbox("Tone", TONE_OPTIONS),
            "orientation": st.selectbox(
                "Orientation",
                ORIENTATION_OPTIONS,
                index=ORIENTATION_OPTIONS.index(DEFAULT_SETTINGS["orientation"]),
            ),
            "quality": st.selectbox(
                "Quality",
                QUALITY_OPTIONS,
                index=QUALITY_OPTIONS.index(DEFAULT_SETTINGS["quality"]),
            ),
            "focusOnProduct": st.slider(
                "Focus on product", 1, 5, DEFAULT_SETTINGS["focusOnProduct"]
            ),
            "shots": st.slider("Shots", 1, 12, DEFAULT_SETTINGS["shots"]),
        }

        for key, label in ADDITIONAL_TOGGLES:
            settings[key] = st.toggle(label, value=DEFAULT_SETTINGS[key])

        return settings


def render_brief_form():
    """Render the product brief inputs."""
    st.subheader("1. Product brief")

    col1, col2 = st.columns([1, 2])
    with col1:
        product_file = st.file_uploader(
            "Product photo",
            type=["png", "jpg", "jpeg", "webp"],
        )
        if product_file:
            st.image(product_file, caption="Preview", use_container_width=True)

    with col2:
        brief = {
            "product_name": st.text_input("Product name"),
            "product_details": st.text_area("Product niche & details"),
            "audience": st.text_area("Target audience"),
            "niche": st.text_input("Product niche"),
        }

    return product_file, brief


def render_scenario_card(scenario: dict):
    """Render one scenario with a selection checkbox."""
    with st.container(border=True):
        checked = st.checkbox(
            f"**{scenario['title']}**",
            value=scenario["id"] in st.session_state.selected_ids,
            key=f"select_{scenario['id']}",
        )
        st.write(scenario["summary"])
        if scenario.get("setting"):
            st.caption(f"Setting: {scenario['setting']}")
        if scenario.get("shotList"):
            st.markdown("\n".join(f"- {shot}" for shot in scenario["shotList"]))
        if scenario.get("hook"):
            st.info(scenario["hook"])

    if checked:
        st.session_state.selected_ids.add(scenario["id"])
    else:
        st.session_state.selected_ids.discard(scenario["id"])


def render_gallery():
    """Render generated images with download buttons."""
    images = st.session_state.images
    if not images:
        return

    st.subheader("3. Gallery")
    columns = st.columns(3)
    for i, image in enumerate(images):
        scenario = image["scenario"]
        content = base64.b64decode(image["data"])
        extension = image["mimeType"].split("/")[-1]
        with columns[i % 3]:
            st.image(content, caption=scenario["title"], use_container_width=True)
            if scenario.get("hook"):
                st.caption(scenario["hook"])
            st.download_button(
                label="⬇️ Download",
                data=content,
                file_name=f"{scenario['id']}.{extension}",
                mime=image["mimeType"],
                key=f"download_{i}",
            )


# ============================================================================
# Main App
# ============================================================================


def main():
    """Main application."""
    init_state()
    thread_id = get_or_create_thread()

    settings = render_sidebar()

    st.header("📸 UGC Studio")
    product_file, brief = render_brief_form()

    can_request_scenarios = bool(
        thread_id
        and product_file
        and brief["audience"].strip()
        and brief["product_details"].strip()
    )

    if st.button(
        "Generate scenarios", type="primary", disabled=not can_request_scenarios
    ):
        st.session_state.images = []
        st.session_state.scenario_error = None
        payload = build_scenario_payload(
            thread_id=thread_id,
            audience=brief["audience"],
            product_details=brief["product_details"],
            product_name=brief["product_name"],
            niche=brief["niche"],
            settings=settings,
        )
        with st.spinner("Planning scenarios..."):
            try:
                scenarios = request_scenarios(payload)
                for key in [k for k in st.session_state if str(k).startswith("select_")]:
                    del st.session_state[key]
                st.session_state.scenarios = scenarios
                st.session_state.selected_ids = {s["id"] for s in scenarios}
            except StudioClientError as e:
                st.session_state.scenario_error = str(e)

    if st.session_state.scenario_error:
        st.error(st.session_state.scenario_error)

    if st.session_state.scenarios:
        st.subheader("2. Pick scenarios")
        columns = st.columns(2)
        for i, scenario in enumerate(st.session_state.scenarios):
            with columns[i % 2]:
                render_scenario_card(scenario)

        can_generate_images = bool(st.session_state.selected_ids and product_file)
        if st.button("Render images", type="primary", disabled=not can_generate_images):
            st.session_state.image_error = None
            with st.spinner("Rendering images, one scenario at a time..."):
                try:
                    payload = build_image_payload(
                        thread_id=thread_id,
                        product_name=brief["product_name"],
                        scenarios=st.session_state.scenarios,
                        selected_ids=st.session_state.selected_ids,
                        settings=settings,
                        image_bytes=product_file.getvalue(),
                        mime_type=product_file.type,
                    )
                    st.session_state.images = request_images(payload)
                except StudioClientError as e:
                    st.session_state.image_error = str(e)

        if st.session_state.image_error:
            st.error(st.session_state.image_error)

    render_gallery()


if __name__ == "__main__":
    main()
