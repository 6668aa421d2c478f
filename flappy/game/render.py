# flappy/game/render.py
from __future__ import annotations
from typing import Iterable, List, Optional
import pygame

from .config import (
    COLOR_SKY, COLOR_SKY_BAND, COLOR_PIPE, COLOR_PIPE_EDGE,
    COLOR_BIRD, COLOR_WING, COLOR_FG, COLOR_DANGER,
)
from .geometry import Pose

# Wing y-offset (fraction of bird height) per animation frame
_WING_DY = {"upflap": 0.15, "midflap": 0.35, "downflap": 0.55}


def _draw_background(surf: pygame.Surface, p: Pose):
    r = pygame.Rect(int(p.x), int(p.y), p.width, p.height)
    pygame.draw.rect(surf, COLOR_SKY, r)
    # a few cloud blobs so the drift is visible
    for fx, fy, rad in ((0.2, 0.2, 18), (0.55, 0.12, 24), (0.8, 0.3, 14)):
        c = (int(p.x + fx * p.width), int(p.y + fy * p.height))
        pygame.draw.circle(surf, COLOR_SKY_BAND, c, rad)
    band = pygame.Rect(r.left, r.bottom - p.height // 6, r.width, p.height // 6)
    pygame.draw.rect(surf, COLOR_SKY_BAND, band)


def _draw_pipe(surf: pygame.Surface, p: Pose):
    r = pygame.Rect(int(p.x), int(p.y), p.width, p.height)
    pygame.draw.rect(surf, COLOR_PIPE, r)
    pygame.draw.rect(surf, COLOR_PIPE_EDGE, r, width=2)
    # lip on the gap side
    lip_h = 12
    lip_y = r.top if p.kind == "pipe_lower" else r.bottom - lip_h
    lip = pygame.Rect(r.left - 3, lip_y, r.width + 6, lip_h)
    pygame.draw.rect(surf, COLOR_PIPE, lip)
    pygame.draw.rect(surf, COLOR_PIPE_EDGE, lip, width=2)


def _bird_sprite(p: Pose, dead: bool) -> pygame.Surface:
    spr = pygame.Surface((p.width, p.height), pygame.SRCALPHA)
    body = COLOR_DANGER if dead else COLOR_BIRD
    pygame.draw.ellipse(spr, body, spr.get_rect())
    wing = COLOR_WING.get(p.frame or "", COLOR_FG)
    wy = int(_WING_DY.get(p.frame or "", 0.35) * p.height)
    pygame.draw.ellipse(spr, wing, pygame.Rect(2, wy, p.width // 2, p.height // 3))
    pygame.draw.circle(spr, COLOR_FG, (int(p.width * 0.72), int(p.height * 0.3)), 4)
    return spr


def _draw_bird(surf: pygame.Surface, p: Pose, dead: bool):
    spr = _bird_sprite(p, dead)
    # pygame rotates counter-clockwise; positive rotation here means nose down
    rotated = pygame.transform.rotate(spr, -p.rotation)
    center = (int(p.x + p.width / 2), int(p.y + p.height / 2))
    surf.blit(rotated, rotated.get_rect(center=center))


def draw_scene(surf: pygame.Surface,
               poses: Iterable[Pose],
               dead: bool = False,
               font: Optional[pygame.font.Font] = None,
               hud: Optional[List[str]] = None):
    """Draw a back-to-front pose list, then optional HUD lines."""
    for p in poses:
        if p.kind == "background":
            _draw_background(surf, p)
        elif p.kind in ("pipe_upper", "pipe_lower"):
            _draw_pipe(surf, p)
        elif p.kind == "bird":
            _draw_bird(surf, p, dead)

    if font is not None and hud:
        for i, line in enumerate(hud):
            surf.blit(font.render(line, True, COLOR_FG), (8, 6 + i * 18))
