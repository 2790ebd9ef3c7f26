# helicave/game/game.py
import sys, argparse
import pygame
from pygame import K_ESCAPE, K_r, K_n
from .config import (
    WIDTH, HEIGHT, FPS, SEED_DEFAULT,
    COLOR_FG, COLOR_DANGER
)
from .controls import PygameController
from .engine import Game
from .geometry import Dimensions
from .level import ChannelGen
from .render import SurfaceFrameFactory


def parse_args():
    p = argparse.ArgumentParser()
    p.add_argument("--seed", type=int, default=None,
                   help="Level seed. Omit for SEED_DEFAULT, use -1 for random each launch.")
    return p.parse_args()

def run():
    args = parse_args()

    # Resolve seed: None -> use SEED_DEFAULT; -1 -> random
    if args.seed is None:
        launch_seed = SEED_DEFAULT
    elif args.seed == -1:
        launch_seed = None  # signals ChannelGen to randomize
    else:
        launch_seed = args.seed

    pygame.init()
    pygame.display.set_caption("helicave")
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("jetbrainsmono", 18)

    dims = Dimensions(WIDTH, HEIGHT)
    frames = SurfaceFrameFactory(screen)
    controller = PygameController()

    def new_game(seed_spec):
        gen = ChannelGen.for_viewport(dims, seed=seed_spec)
        # Freeze the actual seed we ended up with (None -> ChannelGen randomized it)
        return Game(frames, gen, dims, controller), gen.seed

    game, current_seed = new_game(launch_seed)
    alive = True

    panel_w, panel_h = 220, 70
    panel = pygame.Rect((WIDTH - panel_w)//2, (HEIGHT - panel_h)//2, panel_w, panel_h)

    while True:
        clock.tick(FPS)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            if event.type == pygame.KEYDOWN:
                if event.key == K_ESCAPE:
                    pygame.quit(); sys.exit()
                if event.key == K_r and not alive:
                    # Restart SAME seed
                    game, current_seed = new_game(current_seed)
                    alive = True
                if event.key == K_n and not alive:
                    game, current_seed = new_game(None)
                    alive = True

        if alive:
            game.tick()
        game.draw()
        if alive and game.has_collided():
            alive = False
            print(f"Game over! seed={current_seed} score={game.score()}")

        # HUD shows seed so you can reproduce runs
        hud = f"Seed: {current_seed}   Score: {game.score()}"
        screen.blit(font.render(hud, True, COLOR_FG), (12, 10))
        screen.blit(font.render("hold SPACE/mouse to climb | ESC quit", True, (160, 180, 210)), (12, 32))

        if not alive:
            pygame.draw.rect(screen, (40, 60, 90), panel, border_radius=10)
            pygame.draw.rect(screen, COLOR_DANGER, panel, width=2, border_radius=10)
            for i, msg in enumerate(("Game over - Restart (R)", "New Random (N)")):
                txt = font.render(msg, True, (220, 235, 255))
                screen.blit(txt, (panel.centerx - txt.get_width()//2,
                                  panel.centery - txt.get_height() - 5 + i * (txt.get_height() + 10)))

        pygame.display.flip()

if __name__ == "__main__":
    run()
