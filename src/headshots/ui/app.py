"""Gradio UI for Headshots Studio."""

import logging

import gradio as gr

from headshots.core.config import config
from headshots.core.styles import style_choices

from .handlers import (
    apply_generation_outcome,
    choose_style,
    cleanup_session,
    decrease_quantity,
    download_all,
    download_selected,
    handle_upload,
    increase_quantity,
    jump_to_step,
    next_step,
    previous_step,
    remove_upload,
    render_navigation,
    run_generation,
    select_all,
    select_artifact,
    start_generation,
    update_custom_prompt,
)
from .models import WIZARD_STEPS, WizardState

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)
# Per-request logs from httpx are too noisy at INFO
logging.getLogger("httpx").setLevel(logging.WARNING)


def create_ui() -> tuple[gr.Blocks, str]:
    """Create the three-step wizard.

    Returns:
        Tuple of (Gradio Blocks app, custom CSS string)
    """
    custom_css = """
    .step-nav button {
        min-width: 2.5rem;
    }
    .helper-text {
        text-align: center;
        opacity: 0.7;
    }
    """

    app = gr.Blocks(title="AI Headshot Generator")

    with app:
        # Session state - one instance per user; previews are released when
        # the session is deleted
        ui_state = gr.State(WizardState(), delete_callback=cleanup_session)

        gr.Markdown(
            """
            # AI Headshot Generator
            ### Create professional headshots with AI
            """
        )
        stepper = gr.Markdown()

        upload = create_upload_step(ui_state)
        style = create_style_step(ui_state)
        generate = create_generate_step(ui_state)

        # Navigation
        with gr.Row(elem_classes="step-nav"):
            previous_btn = gr.Button("← Previous", interactive=False)
            step_buttons = [
                gr.Button(str(step.id), size="sm", min_width=40) for step in WIZARD_STEPS
            ]
            next_btn = gr.Button("Next →", variant="primary", interactive=False)
        helper = gr.Markdown(elem_classes="helper-text")

        nav_outputs = [
            stepper,
            upload["group"],
            style["group"],
            generate["group"],
            previous_btn,
            next_btn,
            *step_buttons,
            helper,
            generate["summary"],
        ]

        app.load(fn=render_navigation, inputs=[ui_state], outputs=nav_outputs)

        next_btn.click(fn=next_step, inputs=[ui_state], outputs=[*nav_outputs, ui_state])
        previous_btn.click(fn=previous_step, inputs=[ui_state], outputs=[*nav_outputs, ui_state])
        for step, button in zip(WIZARD_STEPS, step_buttons):
            button.click(
                fn=lambda state, step_id=step.id: jump_to_step(step_id, state),
                inputs=[ui_state],
                outputs=[*nav_outputs, ui_state],
            )

        # Any change that can complete a step refreshes the navigation
        for event in upload["events"] + style["events"] + generate["events"]:
            event.then(fn=render_navigation, inputs=[ui_state], outputs=nav_outputs)

    return app, custom_css


def create_upload_step(ui_state: gr.State) -> dict:
    """Step 1: upload a photo."""
    with gr.Group(visible=True) as group:
        gr.Markdown(
            "## Upload Your Photo\n"
            "*JPEG, PNG, WebP or HEIC, up to 10MB. "
            "A clear, front-facing photo works best.*"
        )
        upload_input = gr.File(
            label="Photo",
            file_types=["image", ".heic", ".heif"],
            type="filepath",
        )
        preview = gr.Image(
            label="Preview",
            type="filepath",
            interactive=False,
            visible=False,
            height=300,
        )
        status = gr.Markdown()
        remove_btn = gr.Button("Remove Photo", size="sm", variant="stop")

    events = [
        upload_input.upload(
            fn=handle_upload,
            inputs=[upload_input, ui_state],
            outputs=[preview, status, ui_state],
        ),
        remove_btn.click(
            fn=remove_upload,
            inputs=[ui_state],
            outputs=[upload_input, preview, status, ui_state],
        ),
        upload_input.clear(
            fn=remove_upload,
            inputs=[ui_state],
            outputs=[upload_input, preview, status, ui_state],
        ),
    ]
    return {"group": group, "events": events}


def create_style_step(ui_state: gr.State) -> dict:
    """Step 2: choose a style, add details and set the quantity."""
    with gr.Group(visible=False) as group:
        gr.Markdown("## Choose Your Style\n*Select a style that fits your needs and customize the details*")
        style_radio = gr.Radio(label="Select Style", choices=style_choices(), value=None)
        style_description = gr.Markdown()
        custom_prompt = gr.Textbox(
            label="Custom Details (Optional)",
            placeholder="e.g., wearing glasses, blue shirt, outdoor setting...",
            lines=2,
        )
        with gr.Row():
            minus_btn = gr.Button("−", size="sm", min_width=40)
            quantity = gr.Number(
                label="Number of Headshots",
                value=config.default_quantity,
                precision=0,
                interactive=False,
            )
            plus_btn = gr.Button("+", size="sm", min_width=40)

    events = [
        style_radio.change(
            fn=choose_style,
            inputs=[style_radio, ui_state],
            outputs=[style_description, ui_state],
        ),
        custom_prompt.change(
            fn=update_custom_prompt,
            inputs=[custom_prompt, ui_state],
            outputs=[ui_state],
        ),
        minus_btn.click(fn=decrease_quantity, inputs=[ui_state], outputs=[quantity, ui_state]),
        plus_btn.click(fn=increase_quantity, inputs=[ui_state], outputs=[quantity, ui_state]),
    ]
    return {"group": group, "events": events}


def create_generate_step(ui_state: gr.State) -> dict:
    """Step 3: generate, select and download."""
    with gr.Group(visible=False) as group:
        gr.Markdown("## Generate Your Headshots")
        summary = gr.Markdown()
        generate_btn = gr.Button("✨ Generate Headshots", variant="primary", size="lg")
        status = gr.Markdown()

        gallery = gr.Gallery(
            label="Your AI Headshots (click to select)",
            columns=4,
            height="auto",
            object_fit="cover",
            allow_preview=False,
        )
        selection = gr.Markdown()

        with gr.Row():
            select_all_btn = gr.Button("Select All", size="sm")
            download_selected_btn = gr.Button("Download Selected", size="sm")
            download_all_btn = gr.Button("Download All", size="sm", variant="primary")
            regenerate_btn = gr.Button("🔄 Regenerate", size="sm")

        download_files = gr.File(label="Downloads", file_count="multiple", interactive=False)
        download_status = gr.Markdown()

    events = []
    for button in (generate_btn, regenerate_btn):
        chain = (
            button.click(
                fn=start_generation,
                inputs=[ui_state],
                outputs=[status, gallery, ui_state],
            )
            .then(fn=run_generation, inputs=[ui_state], outputs=None)
            .then(
                fn=apply_generation_outcome,
                inputs=[ui_state],
                outputs=[status, gallery, select_all_btn, ui_state],
            )
        )
        events.append(chain)

    gallery.select(
        fn=select_artifact,
        inputs=[ui_state],
        outputs=[gallery, selection, select_all_btn, ui_state],
    )
    select_all_btn.click(
        fn=select_all,
        inputs=[ui_state],
        outputs=[gallery, selection, select_all_btn, ui_state],
    )
    download_selected_btn.click(
        fn=download_selected,
        inputs=[ui_state],
        outputs=[download_files, download_status, ui_state],
        concurrency_limit=1,
    )
    download_all_btn.click(
        fn=download_all,
        inputs=[ui_state],
        outputs=[download_files, download_status, ui_state],
        concurrency_limit=1,
    )

    return {"group": group, "summary": summary, "events": events}


def main():
    """Main entry point for the application."""
    logger.info("Starting Headshots Studio...")
    logger.info(f"Configuration: {config.model_dump(exclude={'service_api_key'})}")

    app, custom_css = create_ui()

    logger.info(f"Launching Gradio UI on {config.gradio_server_name}:{config.gradio_server_port}")

    app.launch(
        server_name=config.gradio_server_name,
        server_port=config.gradio_server_port,
        share=config.gradio_share,
        show_error=True,
        inbrowser=False,
        css=custom_css,
        max_file_size=config.max_upload_bytes,
        allowed_paths=[str(config.downloads_dir.resolve()), str(config.previews_dir.resolve())],
    )


if __name__ == "__main__":
    main()
