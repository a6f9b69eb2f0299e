"""Model and update function of a snake game."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace
from random import Random
from typing import Callable, ClassVar, Tuple

Point = Tuple[int, int]


class Action(enum.Enum):
    GO_LEFT = "go_left"
    GO_RIGHT = "go_right"
    GO_UP = "go_up"
    GO_DOWN = "go_down"
    RESET = "reset"
    TICK = "tick"


class Direction(enum.Enum):
    LEFT = "left"
    UP = "up"
    RIGHT = "right"
    DOWN = "down"


@dataclass(frozen=True)
class SnakeModel:
    body: Tuple[Point, ...] = ()
    dir: Direction = Direction.LEFT


@dataclass(frozen=True)
class GameModel:
    snake: SnakeModel
    apple_pos: Point = (0, 0)
    over: bool = False

    WIDTH: ClassVar[int] = 25
    HEIGHT: ClassVar[int] = 25


@dataclass(frozen=True)
class AppModel:
    rng: Random = field(compare=False, repr=False)
    game: GameModel


_VERTICAL = frozenset({Direction.UP, Direction.DOWN})

_TURNS = {
    Action.GO_LEFT: Direction.LEFT,
    Action.GO_RIGHT: Direction.RIGHT,
    Action.GO_UP: Direction.UP,
    Action.GO_DOWN: Direction.DOWN,
}

_STEPS = {
    Direction.LEFT: (-1, 0),
    Direction.UP: (0, -1),
    Direction.RIGHT: (1, 0),
    Direction.DOWN: (0, 1),
}


def random_apple_pos(random: Callable[[], int]) -> Point:
    """Return an apple position drawn from ``random``, x first."""
    x = random()
    y = random()
    return (x, y)


def _turn(current: Direction, target: Direction) -> Direction:
    # The snake may only turn sideways, never reverse or keep its axis.
    if (current in _VERTICAL) != (target in _VERTICAL):
        return target
    return current


def _step(pos: Point, direction: Direction) -> Point:
    dx, dy = _STEPS[direction]
    return (pos[0] + dx, pos[1] + dy)


def _move_forward(body: Tuple[Point, ...], direction: Direction) -> Tuple[Point, ...]:
    return (_step(body[0], direction),) + body[:-1]


def _in_bounds(p: Point) -> bool:
    return 0 <= p[0] < GameModel.WIDTH and 0 <= p[1] < GameModel.HEIGHT


def _make_game(random: Callable[[], int]) -> GameModel:
    hx, hy = GameModel.WIDTH // 2, GameModel.HEIGHT // 2
    body = ((hx, hy), (hx - 1, hy), (hx - 2, hy))
    return GameModel(SnakeModel(body, Direction.RIGHT), random_apple_pos(random), False)


def _clone(rng: Random) -> Random:
    copy = Random()
    copy.setstate(rng.getstate())
    return copy


def _drawer(rng: Random) -> Callable[[], int]:
    return lambda: rng.randint(0, GameModel.WIDTH - 1)


def make_initial(seed: int) -> AppModel:
    """Return a fresh game whose randomness is seeded with ``seed``."""
    rng = Random(seed)
    return AppModel(rng, _make_game(_drawer(rng)))


def _tick(game: GameModel, random: Callable[[], int]) -> GameModel:
    snake = game.snake
    prev_back = snake.body[-1]
    body = _move_forward(snake.body, snake.dir)
    head = body[0]
    if head in body[1:] or not _in_bounds(head):
        return replace(game, over=True)
    apple_pos = game.apple_pos
    if prev_back == apple_pos:
        body = body + (prev_back,)
        apple_pos = random_apple_pos(random)
    return replace(game, snake=replace(snake, body=body), apple_pos=apple_pos)


def update(model: AppModel, action: Action) -> AppModel:
    """Return the model after applying ``action``; ``model`` is left untouched."""
    if not isinstance(action, Action):
        raise TypeError(f"not a snake action: {action!r}")
    rng = _clone(model.rng)
    game = model.game
    if action in _TURNS:
        snake = game.snake
        game = replace(game, snake=replace(snake, dir=_turn(snake.dir, _TURNS[action])))
    elif action is Action.TICK:
        game = _tick(game, _drawer(rng))
    else:
        game = _make_game(_drawer(rng))
    return AppModel(rng, game)