"""Gradio wizard for Headshots Studio."""
