import argparse
import time
import timeit

import cv2
import jax
import jax.numpy as jnp
import numpy as np

from chipax import create_state, load_rom, run_ticks, batch_render


def time_it_measure(bench, repeat=10, number=3) -> np.ndarray:
    times = timeit.repeat(bench, repeat=repeat, number=number)
    return np.array(times) / number


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run many CHIP-8 machines in parallel with jax.vmap")
    parser.add_argument("rom", help="Path to a CHIP-8 ROM")
    parser.add_argument("--machines", type=int, default=1000)
    parser.add_argument("--frames", type=int, default=1000)
    parser.add_argument("--grid", default="grid.png", help="Where to save the last frame of the first 16 machines")
    args = parser.parse_args()

    rng = jax.random.PRNGKey(0)
    rng_machines, rng_keys = jax.random.split(rng)

    base = load_rom(create_state(), args.rom)

    # Same ROM everywhere, different PRNG key and random key presses per machine
    states = jax.vmap(lambda key: base.replace(rng=key))(jax.random.split(rng_machines, args.machines))
    keypads = jax.random.bernoulli(rng_keys, 0.05, (args.machines, args.frames, 16))

    rollout = jax.jit(jax.vmap(run_ticks))

    start_compile = time.perf_counter()
    compiled = jax.block_until_ready(rollout.lower(states, keypads).compile())
    end_compile = time.perf_counter()

    print("Compilation time (s):", end_compile - start_compile)

    def bench():
        jax.block_until_ready(compiled(states, keypads))

    times = time_it_measure(bench)
    print("Execution times (s):", times)
    print("Mean time (s):", times.mean())
    print("Q1 (s):", np.quantile(times, 0.25))
    print("Q3 (s):", np.quantile(times, 0.75))
    print("Frames per second:", args.machines * args.frames / times.mean())

    final_states, outputs = compiled(states, keypads)
    print("Halted machines:", int(jnp.sum(final_states.fault != 0)))

    grid = batch_render(final_states.display[:16], scale=4)
    cv2.imwrite(args.grid, cv2.cvtColor(grid, cv2.COLOR_RGBA2BGRA))
    print(f"Saved {args.grid}")
