"""
Run the interpreter without a window.

Draws a row of random hexadecimal glyphs with a few different seeds, prints
one screen as text and packs all of them into a single RGBA grid.
"""

import jax.numpy as jnp
from chipvm import Interpreter, batch_render

# V0 = 0, V1 = 0
# loop: V2 = rand & 0xF, I = glyph(V2), draw 5 rows at (V0, V1), V0 += 5
#       if V0 != 60 goto loop
# halt: goto halt
PROGRAM = bytes([
    0x60, 0x00, 0x61, 0x00,
    0xC2, 0x0F, 0xF2, 0x29, 0xD0, 0x15, 0x70, 0x05,
    0x30, 0x3C, 0x12, 0x04,
    0x12, 0x10,
])


if __name__ == "__main__":
    displays = []
    for seed in range(4):
        vm = Interpreter(seed=seed, log_level="INFO")
        vm.load(PROGRAM)
        vm.run(100)
        displays.append(vm.display)

    print(vm)

    grid = batch_render(jnp.stack(displays), scale=4)
    print(f"Rendered {len(displays)} screens into a grid of shape {grid.shape}")
