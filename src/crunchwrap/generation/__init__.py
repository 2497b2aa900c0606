"""crunchwrap generation - AI logo generation loop."""

from crunchwrap.generation.logo import generate_logo, logo_filename, save_image

__all__ = ["generate_logo", "logo_filename", "save_image"]
