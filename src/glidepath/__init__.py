from .solver import compute_coefs, evaluate, evaluate_derivative, stationary_coefs
from .sampler import sample_path, sample_times
from .controller import MotionController
from .events import Click, Quit
from .config import VisualizerSettings, load_settings
from .errors import ClockReadError, GlidepathError, InitializationError, RenderError


def preview_path(start, end, start_velocity=(0.0, 0.0), resolution=100):
    """
    Convenience function to sample the glide from start to end without a controller.
    Returns an (resolution, 2) array of positions.
    """
    coefs = compute_coefs(start, end, start_velocity)
    return sample_path(coefs[0], coefs[1], resolution)
