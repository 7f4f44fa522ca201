"""
Game Session - one play-through of the maze

Owns the maze, the phase machine, timers, lives and score. Driven by
tick(dt) once per frame; questions suspend play until their request is
answered.
"""

import logging
import math

from utils.constants import (
    CELL_SIZE, PLAYER_RADIUS_RATIO, COLLISION_EPSILON, RIGHT, BOTTOM,
    EVENT_CELL_DENSITY, WALL_TOUCH_COOLDOWN,
    DIFFICULTY_MEDIUM, REASON_WALL, REASON_TIME, REASON_ZONE,
    RESULT_WIN, RESULT_LOSS, OUTCOME_GOAL, OUTCOME_TIMEOUT, OUTCOME_LIVES_EXHAUSTED
)
from utils.helpers import clamp, floor_int, time_seed
from maze.generator import MazeGenerator
from maze.maze_core import manhattan
from maze.difficulty import get_difficulty_config
from maze.seeded_random import SeededRandom
from controls.input_state import InputState
from game.game_state import GameStateManager, GamePhase
from game.errors import (
    SessionLoadError, InvalidTransitionError, QuestionFormatError, ConfigFormatError
)
from game.questions import Question, QuestionBank, QuestionRequest, ServerConfig, resolve_time_limit
from game.settings import PlayerSettings

logger = logging.getLogger(__name__)


class SessionOutcome:
    """
    Final record of a finished session, handed to the result sink
    """
    def __init__(self, player_name, score, time_taken, result, reason,
                 difficulty, seed, answers):
        self.player_name = player_name
        self.score = score
        self.time_taken = time_taken
        self.result = result
        self.reason = reason
        self.difficulty = difficulty
        self.seed = seed
        self.answers = list(answers)

    @property
    def won(self):
        return self.result == RESULT_WIN

    def to_dict(self):
        return {
            'playerName': self.player_name,
            'score': self.score,
            'timeTaken': self.time_taken,
            'result': self.result,
            'reason': self.reason,
            'difficulty': self.difficulty,
            'seed': self.seed,
            'answers': [dict(a) for a in self.answers],
        }

    def __repr__(self):
        return f"SessionOutcome(result={self.result}, reason={self.reason}, score={self.score})"


class GameSession:
    """
    State machine for a single maze run

    Phases: LOADING -> PLAYING <-> QUESTION_ACTIVE, PLAYING <-> PAUSED,
    and any active phase -> ENDED. A finished session is never restarted;
    new_session() builds a fresh one.
    """
    def __init__(self, difficulty=DIFFICULTY_MEDIUM, seed=None, input_state=None,
                 question_presenter=None, outcome_sink=None, settings=None,
                 event_density=EVENT_CELL_DENSITY, on_notice=None):
        """
        Args:
            difficulty: Difficulty key or DifficultyConfig
            seed: Maze seed; time-based when omitted
            input_state: InputState read every tick
            question_presenter: Callable receiving each QuestionRequest
            outcome_sink: Callable receiving the outcome dict when the session ends
            settings: PlayerSettings
            event_density: Fraction of cells sampled as event cells
            on_notice: Callable receiving short feedback messages
        """
        self.config = get_difficulty_config(difficulty)
        self.seed = seed if seed is not None else time_seed()
        self.input_state = input_state or InputState()
        self.question_presenter = question_presenter
        self.outcome_sink = outcome_sink
        self.settings = settings or PlayerSettings()
        self.event_density = event_density
        self.on_notice = on_notice

        self.state_manager = GameStateManager()
        self.maze = None
        self.server_config = ServerConfig()
        self.question_bank = QuestionBank()
        self.question_rng = SeededRandom(self.seed + 1)

        # Session state
        self.lives = self.config.lives
        self.score = 0
        self.elapsed_time = 0.0
        self.time_since_last_question = 0.0
        self.invulnerable_until = None
        self.wall_cooldown_until = None
        self.best_distance_to_goal = None
        self.max_distance = 0
        self.visited_event_cells = set()
        self.answers = []
        self.notices = []
        self.pending_question = None
        self.outcome = None
        self.submission_failed = False
        self.load_failed = False

        # Tracked position in pixels, origin at the maze's top-left corner
        self.cell_size = CELL_SIZE
        self.radius = CELL_SIZE * PLAYER_RADIUS_RATIO
        self.x = self.cell_size / 2
        self.y = self.cell_size / 2
        self.vx = 0.0
        self.vy = 0.0

    @property
    def phase(self):
        return self.state_manager.current_state

    # ========== LOADING ==========

    async def start(self, loader):
        """
        Fetch configuration and questions, then start playing

        Args:
            loader: ContentLoader

        Raises:
            SessionLoadError: if anything fails while loading
        """
        if self.load_failed:
            raise SessionLoadError("session failed to load and cannot be started again")
        if not self.state_manager.is_state(GamePhase.LOADING):
            raise InvalidTransitionError(self.phase, GamePhase.PLAYING)

        try:
            server_config = await loader.fetch_config()
            records = await loader.fetch_questions()
        except Exception as exc:
            raise self._load_error(exc) from exc

        self.begin(server_config, records)

    def begin(self, server_config=None, questions=None):
        """
        Validate content, generate the maze and enter PLAYING

        Args:
            server_config: ServerConfig or dict with optional questionTimeLimit
            questions: QuestionBank, or an iterable of Question/dict records

        Raises:
            SessionLoadError: if the configuration or a question record is invalid
        """
        if self.load_failed:
            raise SessionLoadError("session failed to load and cannot be started again")
        if not self.state_manager.is_state(GamePhase.LOADING):
            raise InvalidTransitionError(self.phase, GamePhase.PLAYING)

        try:
            server_config = ServerConfig.from_dict(server_config)
            bank = self._as_bank(questions)
        except (ConfigFormatError, QuestionFormatError, TypeError) as exc:
            raise self._load_error(exc) from exc

        self.server_config = server_config
        self.question_bank = bank

        generator = MazeGenerator(self.config.rows, self.config.cols, self.seed, self.event_density)
        self.maze = generator.generate()

        start_row, start_col = self.maze.start
        self.x = (start_col + 0.5) * self.cell_size
        self.y = (start_row + 0.5) * self.cell_size
        self.max_distance = manhattan(self.maze.start, self.maze.goal)
        self.best_distance_to_goal = self.max_distance

        self.state_manager.transition_to(GamePhase.PLAYING)
        logger.info(
            "Session started: %s, %dx%d maze, seed=%s, %d questions",
            self.config.key, self.config.rows, self.config.cols, self.seed, len(self.question_bank)
        )

    def _as_bank(self, questions):
        if isinstance(questions, QuestionBank):
            return questions
        items = []
        for q in questions or ():
            items.append(q if isinstance(q, Question) else Question.from_dict(q))
        return QuestionBank(items, self.settings.categories)

    def _load_error(self, exc):
        self.load_failed = True
        logger.error("Session could not load its content: %s", exc)
        return SessionLoadError(f"could not load game content: {exc}")

    # ========== TICK ==========

    def tick(self, dt):
        """
        Advance the session by dt seconds

        Only PLAYING advances timers and movement; the pause button is
        honoured while PLAYING or PAUSED.
        """
        try:
            if self.state_manager.is_state(GamePhase.PAUSED):
                if self.input_state.is_pause_pressed():
                    self.resume()
                return

            if not self.state_manager.is_state(GamePhase.PLAYING):
                return

            if self.input_state.is_pause_pressed():
                self.pause()
                return

            self._advance(max(0.0, dt))
        finally:
            self.input_state.end_frame()

    def _advance(self, dt):
        # 1. Timers
        self.elapsed_time += dt
        self.time_since_last_question += dt

        # 2. Total time limit
        if self.elapsed_time >= self.config.total_time_limit:
            self._end(RESULT_LOSS, OUTCOME_TIMEOUT)
            return

        # 3. Periodic question
        if self.time_since_last_question >= self.config.question_interval:
            self.trigger_question(REASON_TIME)
            if not self._playing():
                return

        # 4. Movement and wall touches
        hit_wall = self._move(dt)
        if hit_wall and self._can_wall_trigger():
            self.wall_cooldown_until = self.elapsed_time + WALL_TOUCH_COOLDOWN
            self.trigger_question(REASON_WALL)
            if not self._playing():
                return

        # 5. Event cells
        cell = self.current_cell()
        if cell.is_pending_event():
            cell.consumed = True
            self.visited_event_cells.add(cell.id)
            self.trigger_question(REASON_ZONE)
            if not self._playing():
                return

        # 6. Progress score
        self._update_progress_score(cell)

        # 7. Goal
        if (cell.row, cell.col) == self.maze.goal:
            self.score += self.completion_bonus()
            self._end(RESULT_WIN, OUTCOME_GOAL)

    def _playing(self):
        return self.state_manager.is_state(GamePhase.PLAYING)

    # ========== MOVEMENT ==========

    def _move(self, dt):
        """Move by the input velocity; returns True if a wall blocked the move"""
        speed = self.config.player_speed
        self.vx = self.input_state.velocity_x(speed)
        self.vy = self.input_state.velocity_y(speed)

        hit = False
        if self.vx:
            hit = self._move_axis(0, self.vx * dt) or hit
        if self.vy:
            hit = self._move_axis(1, self.vy * dt) or hit
        return hit

    def _move_axis(self, axis, delta):
        # Sub-steps never exceed the radius, so a step can't skip a wall
        steps = max(1, int(math.ceil(abs(delta) / self.radius)))
        step = delta / steps
        for _ in range(steps):
            if self._step_axis(axis, step):
                return True
        return False

    def _step_axis(self, axis, step):
        """
        Move along one axis (0 = x, 1 = y); returns True if a wall blocked the step

        The player occupies a square of half-size radius. Crossing a grid
        line is blocked by a wall on that line in any lane the square
        overlaps, and by the end of a wall running between two of those lanes
        in the cell being entered.
        """
        cs = self.cell_size
        r = self.radius
        if axis == 0:
            pos, across, lines, lanes = self.x, self.y, self.maze.cols, self.maze.rows
        else:
            pos, across, lines, lanes = self.y, self.x, self.maze.rows, self.maze.cols

        if step > 0:
            line = math.ceil((pos + r - COLLISION_EPSILON) / cs)
            crossed = line * cs < pos + r + step
            entered = line
            stop = line * cs - r
        else:
            line = math.floor((pos - r + COLLISION_EPSILON) / cs)
            crossed = line * cs > pos - r + step
            entered = line - 1
            stop = line * cs + r

        hit = crossed and self._line_blocked(axis, line, entered, across, lines, lanes)
        new_pos = stop if hit else pos + step
        if axis == 0:
            self.x = new_pos
        else:
            self.y = new_pos
        return hit

    def _line_blocked(self, axis, line, entered, across, lines, lanes):
        if line <= 0 or line >= lines:
            return True  # maze border

        first, last = self._overlapped_lanes(across, lanes)
        for lane in range(first, last + 1):
            if self._wall_on_line(axis, line, lane):
                return True
        for lane in range(first + 1, last + 1):
            if self._wall_on_line(1 - axis, lane, entered):
                return True
        return False

    def _overlapped_lanes(self, center, lanes):
        """First and last row/column the player's extent overlaps"""
        cs = self.cell_size
        first = int(math.floor((center - self.radius + COLLISION_EPSILON) / cs))
        last = int(math.ceil((center + self.radius - COLLISION_EPSILON) / cs)) - 1
        return max(0, first), min(lanes - 1, last)

    def _wall_on_line(self, axis, line, lane):
        """Wall segment on grid line `line` in lane `lane` (axis 0: vertical lines)"""
        if axis == 0:
            return self.maze.cell(lane, line - 1).has_wall(RIGHT)
        return self.maze.cell(line - 1, lane).has_wall(BOTTOM)

    def current_cell(self):
        """Cell under the player's centre"""
        row = clamp(int(self.y // self.cell_size), 0, self.maze.rows - 1)
        col = clamp(int(self.x // self.cell_size), 0, self.maze.cols - 1)
        return self.maze.cell(row, col)

    def is_invulnerable(self):
        return self.invulnerable_until is not None and self.elapsed_time < self.invulnerable_until

    def _can_wall_trigger(self):
        if self.is_invulnerable() or self.pending_question is not None:
            return False
        return self.wall_cooldown_until is None or self.elapsed_time >= self.wall_cooldown_until

    # ========== SCORING ==========

    def _update_progress_score(self, cell):
        """Score from the closest approach to the goal so far"""
        distance = manhattan((cell.row, cell.col), self.maze.goal)
        if distance >= self.best_distance_to_goal:
            return

        self.best_distance_to_goal = distance
        progress = 1 - distance / self.max_distance if self.max_distance else 1.0
        points = floor_int(progress * self.config.max_progress_points * self.config.score_multiplier)
        self.score = max(self.score, points)

    def completion_bonus(self, time_left=None, lives=None):
        """
        Bonus for reaching the goal:
        completion bonus + seconds left + lives left, all times the multiplier
        """
        if time_left is None:
            time_left = self.time_remaining()
        if lives is None:
            lives = self.lives
        m = self.config.score_multiplier

        bonus = floor_int(self.config.completion_bonus * m)
        bonus += floor_int(time_left * self.config.points_per_second_left * m)
        bonus += floor_int(lives * self.config.points_per_life_left * m)
        return bonus

    def time_remaining(self):
        return max(0.0, self.config.total_time_limit - self.elapsed_time)

    # ========== QUESTIONS ==========

    def trigger_question(self, reason):
        """
        Suspend play and hand a question to the presenter

        Returns:
            The QuestionRequest, or None if no question could be asked
        """
        if not self._playing():
            return None

        self.time_since_last_question = 0.0
        question = self.question_bank.draw(self.question_rng)
        if question is None:
            logger.warning("No question available for a %r trigger, skipping", reason)
            self._notice("No questions available, keep going!")
            return None

        self.vx = 0.0
        self.vy = 0.0
        time_limit = resolve_time_limit(question, self.server_config, self.config.question_time_modifier)
        request = QuestionRequest(reason, question, time_limit, self.config, self._on_question_answered)
        self.pending_question = request
        self.state_manager.transition_to(GamePhase.QUESTION_ACTIVE, reason=reason)
        logger.info("Question %r triggered by %s", question.id, reason)

        if self.question_presenter is not None:
            self.question_presenter(request)
        return request

    def _on_question_answered(self, request, correct):
        if request is not self.pending_question or not self.state_manager.is_state(GamePhase.QUESTION_ACTIVE):
            logger.warning("Ignoring answer for a question that is no longer active")
            return

        self.pending_question = None
        self.answers.append(request.answer_log)
        self.invulnerable_until = self.elapsed_time + self.config.invulnerability_duration

        if correct:
            self._notice("Correct!")
        else:
            self.lives = max(0, self.lives - 1)
            self._notice("Incorrect! -1 life")
            if self.lives <= 0:
                self._end(RESULT_LOSS, OUTCOME_LIVES_EXHAUSTED)
                return

        self.state_manager.transition_to(GamePhase.PLAYING)

    # ========== PAUSE ==========

    def pause(self):
        """Pause the game; refused unless PLAYING"""
        if not self.state_manager.can_pause():
            return False
        self.vx = 0.0
        self.vy = 0.0
        self.state_manager.transition_to(GamePhase.PAUSED)
        return True

    def resume(self):
        """Resume the game"""
        if not self.state_manager.can_resume():
            return False
        self.state_manager.transition_to(GamePhase.PLAYING)
        return True

    def toggle_pause(self):
        if self.state_manager.can_pause():
            return self.pause()
        return self.resume()

    # ========== END ==========

    def _end(self, result, reason):
        self.vx = 0.0
        self.vy = 0.0
        self.pending_question = None
        self.state_manager.transition_to(GamePhase.ENDED, result=result, reason=reason)

        self.outcome = SessionOutcome(
            player_name=self.settings.player_name,
            score=self.score,
            time_taken=int(self.elapsed_time),
            result=result,
            reason=reason,
            difficulty=self.config.key,
            seed=self.seed,
            answers=self.answers,
        )
        logger.info("Session ended: %s (%s), score %d", result, reason, self.score)
        self._submit_outcome()

    def _submit_outcome(self):
        """Best effort: a failing sink never changes the outcome"""
        if self.outcome_sink is None:
            return
        try:
            accepted = self.outcome_sink(self.outcome.to_dict())
        except Exception:
            self.submission_failed = True
            logger.warning("Could not submit session result", exc_info=True)
            return
        if accepted is False:
            self.submission_failed = True
            logger.warning("Session result was not stored")

    def _notice(self, message):
        self.notices.append(message)
        if self.on_notice is not None:
            self.on_notice(message)

    # ========== HELPERS ==========

    def new_session(self, seed=None):
        """Fresh session with the same setup and a new seed"""
        return GameSession(
            difficulty=self.config,
            seed=seed,
            input_state=self.input_state,
            question_presenter=self.question_presenter,
            outcome_sink=self.outcome_sink,
            settings=self.settings,
            event_density=self.event_density,
            on_notice=self.on_notice,
        )

    def get_hud(self):
        """Values shown in the side panel"""
        return {
            'lives': self.lives,
            'max_lives': self.config.lives,
            'score': self.score,
            'time_left': self.time_remaining(),
            'next_question_in': max(0.0, self.config.question_interval - self.time_since_last_question),
            'invulnerable': self.is_invulnerable(),
            'phase': self.phase.name,
        }

    def __repr__(self):
        return (f"GameSession(phase={self.phase.name}, lives={self.lives}, "
                f"score={self.score}, t={self.elapsed_time:.1f})")
