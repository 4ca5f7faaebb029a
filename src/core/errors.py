# core/errors.py

class ConfigurationError(ValueError):
    """
    Raised before rendering starts when the scene, camera or tiling
    parameters cannot produce a valid image.
    """
