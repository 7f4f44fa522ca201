"""
Q-Maze - pygame front end
Keyboard play on top of the game core: maze, questions, HUD
"""

import os
import sys
import asyncio
import argparse
import logging

os.environ.setdefault('PYGAME_HIDE_SUPPORT_PROMPT', '1')

import pygame

from controls import InputState, KeyboardAdapter
from game.session import GameSession
from game.game_state import GamePhase
from game.content_loader import FileContentLoader
from game.result_store import ResultStore
from game.settings import PlayerSettings
from game.errors import SessionLoadError
from maze.difficulty import get_difficulty_config
from utils.constants import (
    CELL_SIZE, FPS, PANEL_W, WALL_THICK, TOP, RIGHT, BOTTOM, LEFT,
    DIFFICULTY_KEYS, DIFFICULTY_MEDIUM, CONTENT_FILE, RESULTS_DIR,
    REASON_WALL, REASON_TIME, REASON_ZONE
)
from utils.colors import (
    COLOR_BG, COLOR_MAZE_BG, COLOR_PANEL_BG, COLOR_OVERLAY, COLOR_WALL,
    COLOR_TEXT, COLOR_TEXT_HIGHLIGHT, COLOR_TEXT_DIM, COLOR_OPTION_BG,
    COLOR_OPTION_SELECTED, COLOR_START, COLOR_GOAL, COLOR_EVENT_CELL,
    COLOR_EVENT_DONE, COLOR_PLAYER, COLOR_PLAYER_INVULNERABLE, COLOR_WIN, COLOR_LOSS
)
from utils.helpers import format_time, format_score

logger = logging.getLogger(__name__)

MAZE_AREA = 700
OPTION_KEYS = {pygame.K_1: 0, pygame.K_2: 1, pygame.K_3: 2, pygame.K_4: 3}
REASON_TITLES = {
    REASON_WALL: "You touched a wall!",
    REASON_TIME: "Time for a question!",
    REASON_ZONE: "Question zone!",
}


class QuestionOverlay:
    """
    Presents the pending question and answers it from the keyboard
    """
    def __init__(self):
        self.request = None
        self.selected = 0
        self.time_left = 0.0

    @property
    def active(self):
        return self.request is not None

    def present(self, request):
        """Question presenter callback for GameSession"""
        self.request = request
        self.selected = 0
        self.time_left = float(request.time_limit)

    def update(self, dt):
        if not self.active:
            return
        self.time_left -= dt
        if self.time_left <= 0:
            request, self.request = self.request, None
            request.expire()

    def handle_key(self, key):
        if not self.active:
            return
        if key in (pygame.K_UP, pygame.K_w):
            self.selected = (self.selected - 1) % 4
        elif key in (pygame.K_DOWN, pygame.K_s):
            self.selected = (self.selected + 1) % 4
        elif key in (pygame.K_SPACE, pygame.K_RETURN):
            self._submit(self.selected)
        elif key in OPTION_KEYS:
            self._submit(OPTION_KEYS[key])

    def _submit(self, index):
        request, self.request = self.request, None
        request.submit(index, request.time_limit - self.time_left)

    def draw(self, screen, font, small_font):
        if not self.active:
            return

        w, h = screen.get_size()
        overlay = pygame.Surface((w, h), pygame.SRCALPHA)
        overlay.fill(COLOR_OVERLAY)
        screen.blit(overlay, (0, 0))

        question = self.request.question
        title = REASON_TITLES.get(self.request.reason, "Question")
        y = int(h * 0.2)
        self._blit_center(screen, font, title, COLOR_WALL, y)
        self._blit_center(screen, small_font, question.text, COLOR_TEXT, y + 50)

        box_w = min(600, int(w * 0.8))
        for i, option in enumerate(question.options):
            rect = pygame.Rect((w - box_w) // 2, y + 100 + i * 55, box_w, 45)
            color = COLOR_OPTION_SELECTED if i == self.selected else COLOR_OPTION_BG
            pygame.draw.rect(screen, color, rect, border_radius=6)
            label = small_font.render(f"{'ABCD'[i]}  {option}", True, COLOR_TEXT)
            screen.blit(label, (rect.x + 15, rect.y + 12))

        self._blit_center(screen, small_font, f"Time: {max(0, int(self.time_left + 0.999))}s",
                          COLOR_TEXT_HIGHLIGHT, y + 340)

    @staticmethod
    def _blit_center(screen, font, text, color, y):
        surf = font.render(text, True, color)
        screen.blit(surf, ((screen.get_width() - surf.get_width()) // 2, y))


class MazeGame:
    """
    Main game class
    """
    def __init__(self, difficulty=DIFFICULTY_MEDIUM, seed=None, player_name=None,
                 content_path=CONTENT_FILE, results_dir=RESULTS_DIR):
        pygame.init()
        pygame.display.set_caption("Q-Maze")

        self.config = get_difficulty_config(difficulty)
        self.settings = PlayerSettings(player_name=player_name)

        # Input
        self.input_state = InputState(clock=pygame.time.get_ticks)
        self.keyboard = KeyboardAdapter(self.input_state)

        # Collaborators
        self.overlay = QuestionOverlay()
        self.result_store = ResultStore(results_dir)
        self.loader = FileContentLoader(content_path)

        # Screen
        self.view_cell = max(8, min(MAZE_AREA // self.config.rows, MAZE_AREA // self.config.cols))
        self.scale = self.view_cell / CELL_SIZE
        self.screen_w = self.config.cols * self.view_cell + PANEL_W
        self.screen_h = max(self.config.rows * self.view_cell, 420)
        self.screen = pygame.display.set_mode((self.screen_w, self.screen_h))
        self.font = pygame.font.SysFont("arial", 28, bold=True)
        self.small_font = pygame.font.SysFont("arial", 18)

        self.clock = pygame.time.Clock()
        self.running = True

        self.message_text = ""
        self.message_timer = 0.0
        self.best_score = 0

        self.session = GameSession(
            difficulty=self.config,
            seed=seed,
            input_state=self.input_state,
            question_presenter=self.overlay.present,
            outcome_sink=self.result_store,
            settings=self.settings,
            on_notice=self._show_message,
        )

    def start_session(self):
        """Run the Loading phase; SessionLoadError propagates"""
        asyncio.run(self.session.start(self.loader))
        self.best_score = self.result_store.best_score(self.config.key)

    def _restart(self):
        self.overlay.request = None
        self.input_state.reset()
        self.session = self.session.new_session()
        self.start_session()

    def _show_message(self, text, duration=2.0):
        self.message_text = text
        self.message_timer = duration

    # ========== EVENTS / UPDATE ==========

    def handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                if self.overlay.active:
                    self.overlay.handle_key(event.key)
                elif self.session.phase == GamePhase.ENDED:
                    if event.key == pygame.K_SPACE:
                        self._restart()
                    elif event.key == pygame.K_ESCAPE:
                        self.running = False

    def update(self, dt):
        if self.message_timer > 0:
            self.message_timer -= dt

        self.keyboard.poll()
        self.overlay.update(dt)
        self.session.tick(dt)

    # ========== RENDER ==========

    def render(self):
        self.screen.fill(COLOR_BG)
        self._draw_maze()
        self._draw_player()
        self._draw_panel()
        self.overlay.draw(self.screen, self.font, self.small_font)
        if self.session.phase == GamePhase.PAUSED:
            self._draw_banner("PAUSED - press P to resume", COLOR_PANEL_BG)
        elif self.session.phase == GamePhase.ENDED:
            self._draw_end_screen()
        pygame.display.flip()

    def _draw_maze(self):
        maze = self.session.maze
        vc = self.view_cell

        for cell in maze.iter_cells():
            x0 = cell.col * vc
            y0 = cell.row * vc
            if (cell.row, cell.col) == maze.start:
                color = COLOR_START
            elif (cell.row, cell.col) == maze.goal:
                color = COLOR_GOAL
            elif cell.is_event_cell:
                color = COLOR_EVENT_DONE if cell.consumed else COLOR_EVENT_CELL
            else:
                color = COLOR_MAZE_BG
            pygame.draw.rect(self.screen, color, (x0 + 1, y0 + 1, vc - 2, vc - 2))

            x1 = x0 + vc
            y1 = y0 + vc
            if cell.has_wall(TOP):
                pygame.draw.line(self.screen, COLOR_WALL, (x0, y0), (x1, y0), WALL_THICK)
            if cell.has_wall(RIGHT):
                pygame.draw.line(self.screen, COLOR_WALL, (x1, y0), (x1, y1), WALL_THICK)
            if cell.has_wall(BOTTOM):
                pygame.draw.line(self.screen, COLOR_WALL, (x0, y1), (x1, y1), WALL_THICK)
            if cell.has_wall(LEFT):
                pygame.draw.line(self.screen, COLOR_WALL, (x0, y0), (x0, y1), WALL_THICK)

    def _draw_player(self):
        s = self.session
        color = COLOR_PLAYER_INVULNERABLE if s.is_invulnerable() else COLOR_PLAYER
        center = (int(s.x * self.scale), int(s.y * self.scale))
        pygame.draw.circle(self.screen, color, center, max(3, int(s.radius * self.scale)))

    def _draw_panel(self):
        hud = self.session.get_hud()
        x = self.screen_w - PANEL_W
        pygame.draw.rect(self.screen, COLOR_PANEL_BG, (x, 0, PANEL_W, self.screen_h))

        lines = [
            (f"{self.config.name}", COLOR_TEXT_HIGHLIGHT),
            (f"Lives: {hud['lives']}/{hud['max_lives']}", COLOR_TEXT),
            (f"Time: {format_time(hud['time_left'])}", COLOR_TEXT),
            (f"Next question: {int(hud['next_question_in'])}s", COLOR_TEXT),
            (f"Score: {format_score(hud['score'])}", COLOR_TEXT),
            (f"Best: {format_score(max(self.best_score, hud['score']))}", COLOR_TEXT_DIM),
        ]
        if hud['invulnerable']:
            lines.append(("INVULNERABLE", COLOR_TEXT_HIGHLIGHT))
        if self.message_timer > 0:
            lines.append((self.message_text, COLOR_TEXT_HIGHLIGHT))

        for i, (text, color) in enumerate(lines):
            surf = self.small_font.render(text, True, color)
            self.screen.blit(surf, (x + 15, 20 + i * 32))

    def _draw_banner(self, text, bg):
        surf = self.font.render(text, True, COLOR_TEXT)
        rect = surf.get_rect(center=(self.screen_w // 2, self.screen_h // 2))
        pygame.draw.rect(self.screen, bg, rect.inflate(40, 30), border_radius=8)
        self.screen.blit(surf, rect)

    def _draw_end_screen(self):
        outcome = self.session.outcome
        color = COLOR_WIN if outcome.won else COLOR_LOSS
        title = "You made it!" if outcome.won else {
            'timeout': "Time is up!",
            'lives_exhausted': "Out of lives!",
        }.get(outcome.reason, "Game over")
        self._draw_banner(
            f"{title}  Score {format_score(outcome.score)}  ({outcome.time_taken}s)  SPACE: again",
            color,
        )

    def run(self):
        while self.running:
            dt = self.clock.tick(FPS) / 1000.0
            self.handle_events()
            self.update(dt)
            self.render()
        pygame.quit()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Q-Maze: maze runner with quiz questions")
    parser.add_argument("--difficulty", choices=DIFFICULTY_KEYS, default=DIFFICULTY_MEDIUM)
    parser.add_argument("--seed", type=int, default=None, help="maze seed (time-based by default)")
    parser.add_argument("--name", default=None, help="player name")
    parser.add_argument("--content", default=CONTENT_FILE, help="JSON file with config and questions")
    parser.add_argument("--results", default=RESULTS_DIR, help="directory for session results")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    game = MazeGame(args.difficulty, args.seed, args.name, args.content, args.results)
    try:
        game.start_session()
    except SessionLoadError as e:
        logger.error("Could not start the game: %s", e)
        pygame.quit()
        return 1

    game.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
