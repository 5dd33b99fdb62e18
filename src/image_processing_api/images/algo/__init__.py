from .image_fit import contain, fit_size, flatten, image_fit

__all__ = ["image_fit", "contain", "fit_size", "flatten"]
