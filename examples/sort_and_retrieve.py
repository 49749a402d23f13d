"""Sort on the accelerator, then read the result back through a staging buffer.

Run with `python examples/sort_and_retrieve.py`. On CPU the kernel runs in
interpret mode.
"""
import logging

import jax
import jax.numpy as jnp

import oddeven

logging.basicConfig(level=logging.DEBUG)

x = jnp.array([7, 6, 5, 4, 3, 2, 1, 0], dtype=jnp.uint32)

descriptor = oddeven.make_pass_descriptor(x.shape[-1])
print(f'{descriptor=}')

for i, state in enumerate(oddeven.trace_passes(x), start=1):
  print(f'after launch {i}: {state.tolist()}')

out = oddeven.sort(x)
staging = oddeven.StagingBuffer(out.shape, out.dtype)
staging.copy_from(out)
with staging:
  staging.map_read()
  while not staging.poll():
    pass
  print('mapped:', staging.mapped.tolist())

# Many buffers at once, one per row
rows = jax.random.randint(jax.random.key(0), (4, 10), 0, 100)
print(oddeven.retrieve(oddeven.sort(rows, timeout=60.0)))
