# flappy/game/game.py
import sys, argparse
from typing import Set, Tuple
import pygame
from pygame import K_SPACE, K_ESCAPE, K_r
from .config import (
    WIDTH, HEIGHT, FPS, SEED_DEFAULT, TIMESTEP_MODE, COLOR_DANGER,
)
from .clock import DiscreteClock, make_clock
from .render import draw_scene
from .simulation import Command, Simulation

DEBUG_SIM_LOGS = False
LOG_EVERY_FRAMES = FPS // 2

def parse_args():
    p = argparse.ArgumentParser()
    p.add_argument("--seed", type=int, default=SEED_DEFAULT,
                   help="Pipe layout seed. Omit for a random layout each launch.")
    p.add_argument("--timestep", choices=["continuous", "discrete"], default=TIMESTEP_MODE,
                   help="continuous = real delta time, discrete = fixed 1/FPS steps")
    return p.parse_args()

def read_commands() -> Tuple[Set[Command], bool]:
    """Drain the pygame event queue into abstract commands (each at most once) + restart flag."""
    cmds: Set[Command] = set()
    restart = False
    for event in pygame.event.get():
        if event.type == pygame.QUIT:
            cmds.add(Command.QUIT)
        if event.type == pygame.KEYDOWN:
            if event.key == K_ESCAPE:
                cmds.add(Command.QUIT)
            if event.key == K_SPACE:
                cmds.add(Command.JUMP)
            if event.key == K_r:
                restart = True
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            cmds.add(Command.JUMP)
    return cmds, restart

def step_session(sim: Simulation, dt: float, cmds: Set[Command]):
    """One host tick: advance the simulation, then apply this tick's JUMP."""
    sim.step(dt)
    if Command.JUMP in cmds:
        sim.apply(Command.JUMP)

def run():
    args = parse_args()

    # Debug state line (if enabled): twice per second, by frame count in discrete mode
    _print_timer = 0.0 if DEBUG_SIM_LOGS else None

    pygame.init()
    pygame.display.set_caption("Flappy")
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    font = pygame.font.SysFont("jetbrainsmono", 16)

    # continuous mode: pygame's limiter both caps the frame rate and measures dt
    # discrete mode: DiscreteClock sleeps to its own budget
    limiter = pygame.time.Clock() if args.timestep == "continuous" else None
    clock = make_clock(args.timestep, limiter)
    sim = Simulation(seed=args.seed)

    while True:
        dt = clock.tick()

        cmds, restart = read_commands()
        if Command.QUIT in cmds:
            pygame.quit(); sys.exit()
        if restart:
            # new session, same seed only if one was pinned on the command line
            sim = Simulation(seed=args.seed)
            clock = make_clock(args.timestep, limiter)
            continue

        step_session(sim, dt, cmds)

        if _print_timer is not None:
            if isinstance(clock, DiscreteClock):
                due = clock.every(LOG_EVERY_FRAMES)
            else:
                _print_timer -= dt
                due = _print_timer <= 0.0
                if due:
                    _print_timer = 0.5
            if due:
                b = sim.bird
                print(f"SIM t={sim.elapsed_s:.2f}s y={b.y:.1f} vy={b.vy:.1f} rot={b.rotation:.1f} "
                      f"frame={b.animator.current_frame()} recycles={sim.pipes.recycles} state={sim.state.value}")

        # --- Render ---
        hud = [f"Seed: {sim.seed}   {'LOST' if sim.lost else 'PLAYING'}",
               "SPACE flap | R restart | ESC quit"]
        draw_scene(screen, sim.poses(), dead=sim.lost, font=font, hud=hud)
        if sim.lost:
            msg = font.render("Game over - press R", True, COLOR_DANGER)
            screen.blit(msg, (WIDTH // 2 - msg.get_width() // 2, HEIGHT // 2 - msg.get_height() // 2))

        pygame.display.flip()

if __name__ == "__main__":
    run()
