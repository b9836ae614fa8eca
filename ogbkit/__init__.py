"""Game toolkit: particle emissions, font atlases and text layout, an in-game logger, sprite animation and key bindings."""

__version__ = "0.1.0"
__all__ = [
    "particles",
    "text_layout",
    "font",
    "logger",
    "sprite_animation",
    "input_bindings",
]