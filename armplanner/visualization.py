"""Animated display of the arm, the target circle and the obstacles."""

from __future__ import annotations

import math
from typing import Iterable, Sequence

import pygame

from armplanner.geometry import CircleObstacle

WINDOW_NAME = "Visualization"
WINDOW_WIDTH = 1200
WINDOW_HEIGHT = 800
CIRCLE_THICKNESS = 5
LINE_THICKNESS = 5.0
WORLD_CENTER_X = 300
WORLD_CENTER_Y = 400
LINE1_COLOR = (240, 178, 122)
LINE2_COLOR = (69, 179, 157)
LINE3_COLOR = (236, 112, 99)
CIRCLE_COLOR = (170, 183, 184)
BACKGROUND_COLOR = (255, 255, 255)
TEXT_COLOR = (0, 0, 0)
OBSTACLE_COLOR = (255, 0, 0, 100)
COLLISION_COLORS = ((0, 230, 0, 100), (0, 0, 255, 100), (127, 0, 200, 100))
MAX_FRAME_RATE = 30
PLAY_LOOP = False
INFO_FONT_SIZE = 16
INFO_TEXT_LIMIT = 49

_FRACTIONS = (1.0 / 6.0, 1.0 / 2.0, 5.0 / 6.0)


def joint_positions(
    l1: float, l2: float, l3: float, q1: float, q2: float, q3: float
) -> list[tuple[float, float]]:
    """Base, the two inner joints and the end effector, with the base at the origin."""
    positions = [(0.0, 0.0)]
    x = y = angle = 0.0
    for length, dq in ((l1, q1), (l2, q2), (l3, q3)):
        angle += dq
        x += length * math.cos(angle)
        y += length * math.sin(angle)
        positions.append((x, y))
    return positions


def collision_circles(
    x0: float, y0: float, angle: float, length: float
) -> list[tuple[float, float, float]]:
    """The three (x, y, radius) circles covering a link that starts at (x0, y0)."""
    radius = length / 6.0
    c, s = math.cos(angle), math.sin(angle)
    return [(x0 + f * length * c, y0 + f * length * s, radius) for f in _FRACTIONS]


def info_lines(total_q_length: float, q1: float, q2: float, q3: float) -> list[str]:
    """The text lines shown in the top-left corner of the window."""
    lines = [
        f"{name}: {value:.2f} rads, {math.degrees(value):.2f} degrees"
        for name, value in (("q1", q1), ("q2", q2), ("q3", q3))
    ]
    lines.append(f"Total q length: {total_q_length:.2f}")
    return [line[:INFO_TEXT_LIMIT] for line in lines]


def sinusoidal_trajectory(
    frames: int, frame_rate: float
) -> list[tuple[float, float, float]]:
    """A demonstration trajectory in which each joint swings sinusoidally."""
    return [
        (
            math.pi / 6 * math.sin(2.0 * frame / frame_rate),
            math.pi / 6 * math.sin(3.0 * frame / frame_rate),
            math.pi / 4 * math.sin(4.0 * frame / frame_rate),
        )
        for frame in range(frames)
    ]


class Visualization:
    """A window that animates the arm following a joint trajectory."""

    def __init__(
        self,
        l1: float,
        l2: float,
        l3: float,
        circle_x: float,
        circle_y: float,
        circle_r: float,
        obstacles: Iterable[CircleObstacle] = (),
    ) -> None:
        self.l1 = float(l1)
        self.l2 = float(l2)
        self.l3 = float(l3)
        self.circle_x = WORLD_CENTER_X + float(circle_x)
        self.circle_y = WORLD_CENTER_Y + float(circle_y)
        self.circle_r = float(circle_r)
        self.obstacles = list(obstacles)
        self.q = [math.pi / 6, math.pi / 6, -math.pi / 4]
        pygame.init()
        self.screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
        pygame.display.set_caption(WINDOW_NAME)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(None, INFO_FONT_SIZE)
        self._open = True

    def _close(self) -> None:
        if self._open:
            self._open = False
            pygame.display.quit()

    def _draw_translucent_circle(
        self, color: Sequence[int], x: float, y: float, radius: float
    ) -> None:
        pad = int(math.ceil(radius)) + 1
        surface = pygame.Surface((2 * pad, 2 * pad), pygame.SRCALPHA)
        pygame.draw.circle(surface, color, (pad, pad), radius)
        self.screen.blit(surface, (x - pad, y - pad))

    def _draw_link(
        self, x: float, y: float, angle: float, length: float, color: Sequence[int]
    ) -> None:
        c, s = math.cos(angle), math.sin(angle)
        half = LINE_THICKNESS / 2
        corners = [
            (x + u * c - v * s, y + u * s + v * c)
            for u, v in ((0.0, -half), (length, -half), (length, half), (0.0, half))
        ]
        pygame.draw.polygon(self.screen, color, corners)

    def draw_circle(self, x: float, y: float, r: float) -> None:
        """Draw the target circle with its outline drawn inwards."""
        pygame.draw.circle(self.screen, BACKGROUND_COLOR, (x, y), r)
        pygame.draw.circle(self.screen, CIRCLE_COLOR, (x, y), r, width=CIRCLE_THICKNESS)

    def draw_obstacles(self) -> None:
        """Draw every obstacle as a translucent red disc."""
        for obstacle in self.obstacles:
            self._draw_translucent_circle(
                OBSTACLE_COLOR,
                WORLD_CENTER_X + obstacle.x,
                WORLD_CENTER_Y + obstacle.y,
                obstacle.r,
            )

    def draw_collision_circles(
        self, x0: float, y0: float, angle: float, length: float, color: Sequence[int]
    ) -> None:
        """Draw the three collision circles of a link."""
        for cx, cy, radius in collision_circles(x0, y0, angle, length):
            self._draw_translucent_circle(color, cx, cy, radius)

    def draw_arm(self, q1: float, q2: float, q3: float) -> None:
        """Draw the three links for the given joint angles."""
        positions = [
            (WORLD_CENTER_X + x, WORLD_CENTER_Y + y)
            for x, y in joint_positions(self.l1, self.l2, self.l3, q1, q2, q3)
        ]
        angles = (q1, q1 + q2, q1 + q2 + q3)
        lengths = (self.l1, self.l2, self.l3)
        colors = (LINE1_COLOR, LINE2_COLOR, LINE3_COLOR)
        for (x, y), angle, length, color in zip(positions, angles, lengths, colors):
            self._draw_link(x, y, angle, length, color)
        if self.obstacles:
            for (x, y), angle, length, color in zip(
                positions, angles, lengths, COLLISION_COLORS
            ):
                self.draw_collision_circles(x, y, angle, length, color)

    def draw_info(self, total_q_length: float, q1: float, q2: float, q3: float) -> None:
        """Draw the joint angles and the travelled joint-space length."""
        for row, line in enumerate(info_lines(total_q_length, q1, q2, q3)):
            text = self.font.render(line, True, TEXT_COLOR)
            self.screen.blit(text, (10, 10 + 30 * row))

    def visualize(self, trajectory: Iterable[Sequence[float]]) -> None:
        """Play the trajectory until the window is closed."""
        frames = [tuple(float(v) for v in pose[:3]) for pose in trajectory]
        if not frames:
            raise ValueError("trajectory is empty")
        frame = 0
        total_q_length = 0.0
        while self._open:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self._close()
            if not self._open:
                break
            self.screen.fill(BACKGROUND_COLOR)
            self.draw_circle(self.circle_x, self.circle_y, self.circle_r)
            self.draw_obstacles()
            self.draw_arm(*frames[frame])
            self.draw_info(total_q_length, *frames[frame])
            if frame < len(frames) - 1:
                total_q_length += math.dist(frames[frame + 1], frames[frame])
                frame += 1
            elif PLAY_LOOP:
                frame = 0
                total_q_length = 0.0
            pygame.display.flip()
            self.clock.tick(MAX_FRAME_RATE)

    def play_sinusoidal_motion(self) -> None:
        """Play ten seconds of a sinusoidal demonstration motion."""
        trajectory = sinusoidal_trajectory(MAX_FRAME_RATE * 10, MAX_FRAME_RATE)
        self.q = list(trajectory[-1])
        self.visualize(trajectory)