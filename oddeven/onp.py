import jax.numpy as jnp

from oddeven._src.schedule import sort as _transposition_sort


def sort(a, axis=-1, kind=None, order=None, interpret=None, **kwargs):
    """
    Sort an array using the odd-even transposition network.

    Args:
        a: Input array.
        axis: Axis along which to sort. Must be -1 or the last dimension.
              If None, the array is flattened before sorting.
        kind: Sort kind (ignored, for compatibility with numpy).
        order: Sort order (ignored, for compatibility with numpy).
        interpret: Whether to use interpreter mode. Defaults to True on CPU.
        **kwargs: Forwarded to `oddeven.sort` (num_lanes_per_group,
              limits, timeout).

    Returns:
        Sorted array.

    Note:
        Only supports axis=-1, the last dimension, or None.
    """
    del kind, order
    a = jnp.asarray(a)

    if a.ndim == 0:
        raise ValueError("Cannot sort scalar arrays")

    if axis is None:
        a = a.ravel()
    else:
        canonical_axis = axis if axis >= 0 else axis + a.ndim
        if canonical_axis != a.ndim - 1:
            raise ValueError(
                f"onp only supports sorting along the last axis. "
                f"Got axis={axis} (canonical: {canonical_axis}) for {a.ndim}D array"
            )

    if a.size == 0:
        return a

    # Rows of the last axis are independent element buffers
    target_shape = a.shape
    a_reshaped = a.reshape(-1, a.shape[-1])
    result = _transposition_sort(a_reshaped, interpret=interpret, **kwargs)
    return result.reshape(target_shape)
