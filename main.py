"""
Pygame front-end for the CHIP-8 interpreter
"""

import sys
import time

import pygame
from chipvm import Interpreter, Chip8Error, chip8_display_to_rgb, create_color_scheme

# Classic COSMAC VIP layout on the left of a QWERTY keyboard
KEY_MAP = {
    pygame.K_1: 0x1, pygame.K_2: 0x2, pygame.K_3: 0x3, pygame.K_4: 0xC,
    pygame.K_q: 0x4, pygame.K_w: 0x5, pygame.K_e: 0x6, pygame.K_r: 0xD,
    pygame.K_a: 0x7, pygame.K_s: 0x8, pygame.K_d: 0x9, pygame.K_f: 0xE,
    pygame.K_z: 0xA, pygame.K_x: 0x0, pygame.K_c: 0xB, pygame.K_v: 0xF,
}


def draw_overlay_text(surface, text_lines, position, font, bg_color=(0, 0, 0), text_color=(255, 255, 255), alpha=120):
    """Draw text with semi-transparent background overlay"""
    if not text_lines:
        return

    line_height = font.get_height()
    max_width = max(font.size(line)[0] for line in text_lines)
    overlay = pygame.Surface((max_width + 16, len(text_lines) * line_height + 8))
    overlay.set_alpha(alpha)
    overlay.fill(bg_color)
    surface.blit(overlay, position)

    x, y = position
    for i, line in enumerate(text_lines):
        text_surface = font.render(line, True, text_color)
        surface.blit(text_surface, (x + 8, y + 4 + i * line_height))


def run_emulator(rom_filename, scale=8, ipf=10, color_scheme="classic", log_level="INFO"):
    """Main loop: ``ipf`` instructions and one timer tick per 60 Hz frame"""
    vm = Interpreter(seed=int(time.time()), log_level=log_level)
    try:
        vm.load_rom(rom_filename)
    except OSError as e:
        vm.logger.error(f"Cannot load {rom_filename}: {e}")
        return 1

    pygame.init()
    screen = pygame.display.set_mode((64 * scale, 32 * scale))
    pygame.display.set_caption(f"CHIP-8 - {rom_filename}")
    clock = pygame.time.Clock()
    font = pygame.font.Font(None, 18)
    on_color, off_color = create_color_scheme(color_scheme)

    running = True
    paused = False
    show_debug = False
    halted = None

    while running:
        clock.tick(60)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_p:
                    paused = not paused
                elif event.key == pygame.K_F1:
                    show_debug = not show_debug
                elif event.key == pygame.K_F5:
                    vm.reset()
                    halted = None
                elif event.key == pygame.K_EQUALS:
                    ipf = min(100, ipf + 3)
                    vm.logger.info(f"Speed: {ipf} IPF")
                elif event.key == pygame.K_MINUS:
                    ipf = max(1, ipf - 3)
                    vm.logger.info(f"Speed: {ipf} IPF")
                elif event.key in KEY_MAP:
                    vm.key_down(KEY_MAP[event.key])
            elif event.type == pygame.KEYUP:
                if event.key in KEY_MAP:
                    vm.key_up(KEY_MAP[event.key])

        if not paused and halted is None:
            try:
                vm.run(ipf)
            except Chip8Error as e:
                halted = str(e)
            vm.tick_timers()

        frame = chip8_display_to_rgb(vm.display, scale, on_color, off_color)
        pygame.surfarray.blit_array(screen, frame.swapaxes(0, 1))

        if show_debug:
            registers = vm.registers.tolist()
            debug_lines = [
                f"PC: 0x{vm.program_counter:03X}  I: 0x{vm.address_register:03X}  SP: {vm.stack_pointer}",
                f"DT: {vm.delay_timer}  ST: {vm.sound_timer}  IPF: {ipf}",
            ] + [
                " ".join(f"V{j:X}:{registers[j]:02X}" for j in range(i, i + 4))
                for i in range(0, 16, 4)
            ]
            draw_overlay_text(screen, debug_lines, (5, 5), font, alpha=100)

        if halted is not None:
            draw_overlay_text(screen, ["HALTED - F5 to reset", halted], (5, 32 * scale - 40), font,
                              text_color=(255, 255, 0), alpha=160)
        elif paused:
            draw_overlay_text(screen, ["PAUSED - P to resume"], (5, 32 * scale - 25), font,
                              text_color=(255, 255, 0))

        pygame.display.flip()

    pygame.quit()
    return 0


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print(f"usage: {sys.argv[0]} ROM [IPF]")
        sys.exit(2)
    sys.exit(run_emulator(sys.argv[1], ipf=int(sys.argv[2]) if len(sys.argv) > 2 else 10))
