import jax
import jax.numpy as jnp

import oddeven
from oddeven.test_utils import benchmark
from oddeven.utils import is_cpu_platform


def run_benchmarks():
  ntoken = 8
  interpret = is_cpu_platform()
  for n in (
      2**10,
      2**12 + 1,
  ):
    for dtype in (
        jnp.float32,
        jnp.bfloat16,
        jnp.int32,
    ):
      x = jax.random.randint(
          jax.random.key(0), (ntoken, n), jnp.iinfo(jnp.int32).min,
          jnp.iinfo(jnp.int32).max, jnp.int32)
      if dtype == jnp.bfloat16:
        x = jax.random.normal(jax.random.key(0), (ntoken, n)).astype(dtype)
      else:
        x = x.view(dtype)
      for num_lanes_per_group in (64, 256):
        print(f'\n{(x.shape, x.dtype)} {num_lanes_per_group=}')

        def _run():
          return (
              oddeven.sort(x, num_lanes_per_group=num_lanes_per_group,
                           interpret=interpret),
              jnp.sort(x, axis=-1),
          )
        benchmark(_run, num_launches=oddeven.num_launches_required(n))


if __name__ == "__main__":
  run_benchmarks()
