"""
Chipax frontend: pygame window, keyboard input and beeper around the interpreter
"""

import argparse
import time

import numpy as np
import pygame

from chipax import (
    Interpreter, Chip8Error, keypad_snapshot, chip8_display_to_rgb, create_color_scheme, save_video,
    SCREEN_WIDTH, SCREEN_HEIGHT, NUM_KEYS
)
from chipax.logging import ConsoleLogger

BEEP_FREQUENCY = 440
BEEP_DURATION_MS = 100
SAMPLE_RATE = 22050


def make_beep() -> pygame.mixer.Sound:
    """Short square wave played whenever the sound timer runs out."""
    samples = int(SAMPLE_RATE * BEEP_DURATION_MS / 1000)
    t = np.arange(samples) / SAMPLE_RATE
    wave = np.where(np.sin(2 * np.pi * BEEP_FREQUENCY * t) >= 0, 8000, -8000).astype(np.int16)
    return pygame.sndarray.make_sound(np.column_stack((wave, wave)))


def pressed_key_names() -> list[str]:
    """Names of the keyboard keys currently held down."""
    state = pygame.key.get_pressed()
    return [pygame.key.name(code) for code in range(len(state)) if state[code]]


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


def run_emulator(rom_filename, scale=8, fps=60, color_scheme="classic", seed=0, logger=None):
    """Main emulator loop: one interpreter tick per rendered frame."""
    logger = logger or ConsoleLogger("Chipax")
    on_color, off_color = create_color_scheme(color_scheme)

    pygame.mixer.pre_init(SAMPLE_RATE, -16, 2)
    pygame.init()
    screen = pygame.display.set_mode((SCREEN_WIDTH * scale, SCREEN_HEIGHT * scale))
    pygame.display.set_caption(f"Chipax - {rom_filename}")
    clock = pygame.time.Clock()
    beep = make_beep()
    font = pygame.font.Font(None, 18)

    interpreter = Interpreter(seed=seed, logger=logger)
    interpreter.load_rom(rom_filename)

    logger.info("Controls: ESC=Quit, P=Pause, F5=Reset, TAB=Debug, +/-=Speed, keypad on 1-4/Q-R/A-F/Z-V")

    running = True
    paused = False
    show_debug = False
    frame = None
    frames_run = 0
    start_time = time.time()

    while running:
        clock.tick(fps)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_p:
                    paused = not paused
                    logger.info("Paused" if paused else "Resumed")
                elif event.key == pygame.K_TAB:
                    show_debug = not show_debug
                elif event.key == pygame.K_EQUALS:
                    fps = min(600, fps + 10)
                    logger.info(f"Speed: {fps} FPS")
                elif event.key == pygame.K_MINUS:
                    fps = max(10, fps - 10)
                    logger.info(f"Speed: {fps} FPS")
                elif event.key == pygame.K_F5:
                    interpreter.initialize()
                    interpreter.load_rom(rom_filename)
                    frame = None
                    logger.info("Reset")

        if not paused and not interpreter.halted:
            try:
                output = interpreter.tick(keypad_snapshot(pressed_key_names()))
            except Chip8Error as e:
                logger.critical(f"Emulation stopped: {e}")
                paused = True
            else:
                frames_run += 1
                if bool(output.beep_requested):
                    beep.play()
                if bool(output.display_changed) or frame is None:
                    rgb = chip8_display_to_rgb(output.display, scale, on_color, off_color)
                    frame = pygame.surfarray.make_surface(rgb.swapaxes(0, 1))

        if frame is not None:
            screen.blit(frame, (0, 0))

        if show_debug:
            state = interpreter.state
            runtime = time.time() - start_time
            lines = [
                f"PC: 0x{int(state.pc):03X}  I: 0x{int(state.I):03X}",
                f"Delay: {int(state.delay_timer)}  Sound: {int(state.sound_timer)}",
                f"Frames: {frames_run}  FPS: {clock.get_fps():.1f}",
                f"Status: {'HALTED' if interpreter.halted else 'PAUSED' if paused else 'RUNNING'}",
            ]
            for i in range(0, 16, 4):
                lines.append(" ".join(f"V{j:X}:{int(state.V[j]):02X}" for j in range(i, i + 4)))
            draw_overlay_text(screen, lines, (5, 5), font, alpha=100)
            logger.debug(f"{frames_run} frames in {runtime:.1f}s")

        pygame.display.flip()

    pygame.quit()


def run_headless(rom_filename, frames, seed=0, video=None, fps=60, scale=8, color_scheme="classic", logger=None):
    """Run a fixed number of frames with no input, optionally saving them as a video."""
    logger = logger or ConsoleLogger("Chipax")
    interpreter = Interpreter(seed=seed, logger=logger)
    interpreter.load_rom(rom_filename)

    keypads = np.zeros((frames, NUM_KEYS), dtype=np.bool_)
    try:
        outputs = interpreter.run(keypads, progress=True)
    except Chip8Error as e:
        logger.critical(f"Emulation stopped: {e}")
        return

    logger.info(f"Ran {frames} frames, {int(np.sum(outputs.display_changed))} display updates, "
                f"{int(np.sum(outputs.beep_requested))} beeps")
    if video:
        written = save_video(outputs.display, video, fps=fps, scale=scale, color_scheme=color_scheme)
        logger.info(f"Video saved: {video} ({written} frames, {fps} FPS, {written / fps:.1f}s)")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run a CHIP-8 ROM")
    parser.add_argument("rom", type=str, help="Path to the CHIP-8 ROM file")
    parser.add_argument("--scale", type=int, default=8, help="Pixel upscaling factor (default: 8)")
    parser.add_argument("--fps", type=int, default=60, help="Frames (ticks) per second (default: 60)")
    parser.add_argument("--color-scheme", type=str, default="classic", help="Display color scheme (default: classic)")
    parser.add_argument("--seed", type=int, default=0, help="Random seed for CXNN (default: 0)")
    parser.add_argument("--headless", action="store_true", help="Run without a window")
    parser.add_argument("--frames", type=int, default=600, help="Frames to run in headless mode (default: 600)")
    parser.add_argument("--video", type=str, default=None, help="Save headless frames to this MP4 file")
    parser.add_argument("--log-level", type=str, default="INFO", help="Console log level (default: INFO)")
    args = parser.parse_args()

    console = ConsoleLogger("Chipax", log_level=args.log_level)
    if args.headless:
        run_headless(args.rom, args.frames, seed=args.seed, video=args.video, fps=args.fps,
                     scale=args.scale, color_scheme=args.color_scheme, logger=console)
    else:
        run_emulator(args.rom, scale=args.scale, fps=args.fps, color_scheme=args.color_scheme,
                     seed=args.seed, logger=console)
