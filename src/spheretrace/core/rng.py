"""Explicit-state random number generation for Taichi kernels.

Every function that consumes randomness takes the generator state as an
argument and returns the advanced state next to its result:

    value, state = next_float(state)

The state is a single nonzero ``ti.u32``. Render kernels seed one stream per
pixel with ``seed_stream(seed, pixel_index)``, so each pixel's samples are a
deterministic function of the global seed and the pixel coordinates no matter
in which order (or on how many threads) the pixels are evaluated.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from spheretrace.core.rng import next_float, seed_stream
    >>> @ti.kernel
    ... def draw() -> ti.f32:
    ...     state = seed_stream(ti.u32(42), ti.u32(0))
    ...     value, state = next_float(state)
    ...     return value
"""

import taichi as ti

# LCG step (Numerical Recipes constants) followed by the PCG output permutation.
# All constants fit in a signed 32-bit literal.
LCG_MULTIPLIER = 1664525
LCG_INCREMENT = 1013904223
PCG_OUTPUT_MULTIPLIER = 277803737

# 2^-24: maps the top 24 bits of a u32 onto [0, 1)
FLOAT_SCALE = 1.0 / 16777216.0


@ti.func
def pcg_hash(value: ti.u32) -> ti.u32:
    """Hash a 32-bit integer with the PCG-RXS-M-XS output permutation of an LCG step.

    Args:
        value: The value to hash.

    Returns:
        A well-mixed 32-bit hash of value.
    """
    state = value * ti.u32(LCG_MULTIPLIER) + ti.u32(LCG_INCREMENT)
    word = ((state >> ((state >> ti.u32(28)) + ti.u32(4))) ^ state) * ti.u32(
        PCG_OUTPUT_MULTIPLIER
    )
    return (word >> ti.u32(22)) ^ word


@ti.func
def seed_stream(seed: ti.u32, stream: ti.u32) -> ti.u32:
    """Derive the initial state of an independent random stream.

    Args:
        seed: Global seed shared by all streams of a render.
        stream: Stream index (the render kernel uses the linear pixel index).

    Returns:
        A nonzero generator state.
    """
    state = pcg_hash(seed ^ pcg_hash(stream))
    # xorshift has a fixed point at zero
    if state == ti.u32(0):
        state = ti.u32(1)
    return state


@ti.func
def next_u32(state: ti.u32) -> ti.u32:
    """Advance the generator by one xorshift32 step.

    Args:
        state: Current (nonzero) generator state.

    Returns:
        The next state, which is also the next random 32-bit value.
    """
    x = state
    x ^= x << ti.u32(13)
    x ^= x >> ti.u32(17)
    x ^= x << ti.u32(5)
    return x


@ti.func
def next_float(state: ti.u32):
    """Draw a uniform float in [0, 1).

    Args:
        state: Current generator state.

    Returns:
        A tuple (value, state) where value is in [0, 1) and state is the
        advanced generator state.
    """
    advanced = next_u32(state)
    value = ti.cast(advanced >> ti.u32(8), ti.f32) * FLOAT_SCALE
    return value, advanced
