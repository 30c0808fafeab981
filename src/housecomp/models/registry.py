"""Default competition table for housecomp.

Declaration order matters: it is the order of the weighted selection list
and the order searched for the empty-pool fallback.

Scoring summary:
- Most challenges report a higher-is-better value on a 0-100 scale (raw)
- Time-trial challenges report elapsed ms (lowerBetter with a per-game window)
- Snake, Tetris and Minesweeps name their own winner (authoritative)
"""

from __future__ import annotations

from housecomp.models.competition import (
    CompetitionCategory,
    CompetitionDefinition,
    MetricKind,
    ScoringAdapter,
    ScoringParams,
)


# =============================================================================
# Logic
# =============================================================================

COUNT_HOUSE = CompetitionDefinition(
    key="countHouse",
    title="Count House",
    description="Count objects appearing on screen quickly and accurately",
    instructions=(
        "Objects appear briefly on screen",
        "Count how many you see",
        "Enter your count using the number pad",
        "Submit before time expires",
    ),
    metric_kind=MetricKind.ACCURACY,
    metric_label="Accuracy %",
    time_limit_ms=60_000,
    module_path="count-house.js",
    category=CompetitionCategory.LOGIC,
)

MEMORY_MATCH = CompetitionDefinition(
    key="memoryMatch",
    title="Memory Colors",
    description="Watch and repeat color sequence",
    instructions=(
        "Colored buttons light up in sequence",
        "Watch and memorize the pattern",
        "Repeat the sequence by tapping the buttons",
        "Sequences get longer with each round",
    ),
    metric_kind=MetricKind.ACCURACY,
    metric_label="Rounds",
    time_limit_ms=60_000,
    module_path="memory-match.js",
    category=CompetitionCategory.LOGIC,
)

TIMING_BAR = CompetitionDefinition(
    key="timingBar",
    title="Timing Bar",
    description="Stop the bar near center for high score",
    instructions=(
        "A bar moves back and forth across the screen",
        "A target zone is marked in the center",
        "Tap to stop the bar",
        "Get as close to the center as you can",
    ),
    metric_kind=MetricKind.ACCURACY,
    metric_label="Accuracy %",
    time_limit_ms=30_000,
    module_path="timing-bar.js",
    category=CompetitionCategory.LOGIC,
)

WORD_ANAGRAM = CompetitionDefinition(
    key="wordAnagram",
    title="Word Anagram",
    description="Unscramble Big Brother words",
    instructions=(
        "Scrambled letters appear on screen",
        "Drag or tap letters to rearrange them",
        "Form the correct Big Brother word",
        "Submit your answer",
    ),
    metric_kind=MetricKind.ACCURACY,
    metric_label="Words",
    time_limit_ms=60_000,
    module_path="word-anagram.js",
    category=CompetitionCategory.LOGIC,
)

ESTIMATION_GAME = CompetitionDefinition(
    key="estimationGame",
    title="Estimation",
    description="Count dots and guess the total",
    instructions=(
        "Dots appear briefly on screen",
        "Estimate the total count",
        "Enter your estimate using the number pad",
        "Submit before time runs out",
    ),
    metric_kind=MetricKind.ACCURACY,
    metric_label="Accuracy %",
    time_limit_ms=60_000,
    module_path="estimation-game.js",
    category=CompetitionCategory.LOGIC,
)

MEMORY_ZIPLINE = CompetitionDefinition(
    key="memoryZipline",
    title="Memory Zipline",
    description="Remember and repeat zipline path sequence",
    instructions=(
        "Watch a zipline path sequence",
        "Memorize the route taken",
        "Replay the sequence by tapping platforms",
        "Sequences get longer each round",
    ),
    metric_kind=MetricKind.ACCURACY,
    metric_label="Rounds",
    time_limit_ms=60_000,
    module_path="memory-zipline.js",
    category=CompetitionCategory.LOGIC,
)

SWIPE_MAZE = CompetitionDefinition(
    key="swipeMaze",
    title="Swipe Maze",
    description="Navigate through a maze using swipe gestures",
    instructions=(
        "A maze is displayed on screen",
        "Swipe in a direction to move",
        "Avoid hitting walls",
        "Reach the exit as fast as possible",
    ),
    metric_kind=MetricKind.TIME,
    metric_label="Time (s)",
    time_limit_ms=60_000,
    scoring_adapter=ScoringAdapter.LOWER_BETTER.value,
    scoring_params=ScoringParams(target_ms=5000, max_ms=60000),
    module_path="swipe-maze.js",
    category=CompetitionCategory.LOGIC,
)

SOCIAL_STRINGS = CompetitionDefinition(
    key="socialStrings",
    title="Social Strings",
    description="Identify houseguests in alliances together",
    instructions=(
        "View a network of houseguest connections",
        "Identify alliance groups",
        "Tap or connect houseguests in the same alliance",
        "Complete the social network map",
    ),
    metric_kind=MetricKind.ACCURACY,
    metric_label="Score",
    time_limit_ms=60_000,
    module_path="social-strings.js",
    category=CompetitionCategory.LOGIC,
)

LOGIC_LOCKS = CompetitionDefinition(
    key="logicLocks",
    title="Logic Locks",
    description="Solve logic puzzles to unlock the vault",
    instructions=(
        "Clues are provided about the lock combination",
        "Use logical deduction to find the solution",
        "Input your answer",
        "Complete multiple locks",
    ),
    metric_kind=MetricKind.ACCURACY,
    metric_label="Locks",
    time_limit_ms=60_000,
    module_path="logic-locks.js",
    category=CompetitionCategory.LOGIC,
)

CARD_CLASH = CompetitionDefinition(
    key="cardClash",
    title="Card Clash",
    description="Memory card matching game",
    instructions=(
        "Cards are placed face-down in a grid",
        "Tap two cards to flip them",
        "If they match, they stay face-up",
        "Find all pairs in as few moves as possible",
    ),
    metric_kind=MetricKind.ACCURACY,
    metric_label="Score",
    time_limit_ms=60_000,
    module_path="card-clash.js",
    category=CompetitionCategory.LOGIC,
)

GRID_LOCK = CompetitionDefinition(
    key="gridLock",
    title="Grid Lock",
    description="Unlock grid patterns puzzle",
    instructions=(
        "A locked grid is presented",
        "Clues indicate which cells to toggle",
        "Tap cells to lock/unlock them",
        "Match the solution pattern",
    ),
    metric_kind=MetricKind.HYBRID,
    metric_label="Score",
    time_limit_ms=60_000,
    module_path="grid-lock.js",
    category=CompetitionCategory.LOGIC,
)

KEY_MASTER = CompetitionDefinition(
    key="keyMaster",
    title="Key Master",
    description="Unlock sequences puzzle",
    instructions=(
        "A sequence lock is presented",
        "Determine the correct unlock pattern",
        "Input the pattern using buttons or keys",
        "Unlock the sequence",
    ),
    metric_kind=MetricKind.ACCURACY,
    metric_label="Score",
    time_limit_ms=60_000,
    module_path="key-master.js",
    category=CompetitionCategory.LOGIC,
)

HANGMAN = CompetitionDefinition(
    key="hangman",
    title="Hangman",
    description="Classic hangman with on-screen keyboard",
    instructions=(
        "A word is hidden with blank spaces for each letter",
        "Tap letters on the keyboard to guess",
        "Correct letters appear in the word",
        "Wrong letters reduce your remaining attempts",
    ),
    metric_kind=MetricKind.HYBRID,
    metric_label="Score",
    time_limit_ms=60_000,
    module_path="hangman.js",
    category=CompetitionCategory.LOGIC,
)

TILT_LABYRINTH = CompetitionDefinition(
    key="tiltLabyrinth",
    title="Tilt Labyrinth",
    description="Tilt phone to move ball through maze",
    instructions=(
        "Tilt your device to move the ball",
        "Navigate through walls and obstacles",
        "Reach the green goal area",
        "Avoid falling into holes (if present)",
    ),
    metric_kind=MetricKind.TIME,
    metric_label="Time (s)",
    time_limit_ms=60_000,
    scoring_adapter=ScoringAdapter.LOWER_BETTER.value,
    scoring_params=ScoringParams(target_ms=5000, max_ms=60000),
    module_path="tilt-labyrinth.js",
    category=CompetitionCategory.LOGIC,
)

TETRIS = CompetitionDefinition(
    key="tetris",
    title="Tetris",
    description="Classic falling blocks puzzle",
    instructions=(
        "Blocks fall from the top of the screen",
        "Move blocks left or right",
        "Rotate blocks to fit spaces",
        "Complete horizontal lines to clear them",
    ),
    metric_kind=MetricKind.POINTS,
    metric_label="Score",
    authoritative=True,
    scoring_adapter=ScoringAdapter.AUTHORITATIVE.value,
    module_path="tetris.js",
    weight=2,
    category=CompetitionCategory.LOGIC,
)

TRAVELING_DOTS = CompetitionDefinition(
    key="travelingDots",
    title="Traveling Dots",
    description="Draw optimal path between points",
    instructions=(
        "Multiple dots appear on the screen",
        "Tap dots in sequence to connect them",
        "Create a path visiting all dots",
        "Avoid crossing your existing path",
    ),
    metric_kind=MetricKind.HYBRID,
    metric_label="Score",
    time_limit_ms=60_000,
    module_path="traveling-dots.js",
    category=CompetitionCategory.LOGIC,
)

MINESWEEPS = CompetitionDefinition(
    key="minesweeps",
    title="Minesweeps",
    description="Classic minesweeper puzzle",
    instructions=(
        "Tap cells to reveal them",
        "Numbers show how many mines are adjacent",
        "Use logic to determine mine locations",
        "Flag suspected mines (long press)",
    ),
    metric_kind=MetricKind.ACCURACY,
    metric_label="Score",
    authoritative=True,
    scoring_adapter=ScoringAdapter.AUTHORITATIVE.value,
    module_path="minesweeper.js",
    category=CompetitionCategory.LOGIC,
)


# =============================================================================
# Trivia
# =============================================================================

TRIVIA_PULSE = CompetitionDefinition(
    key="triviaPulse",
    title="Trivia Pulse",
    description="Time-pressured Big Brother trivia questions",
    instructions=(
        "Questions appear about Big Brother history and gameplay",
        "Select from multiple choice answers",
        "Faster correct answers score more points",
        "Answer as many as possible before time runs out",
    ),
    metric_kind=MetricKind.HYBRID,
    metric_label="Score",
    time_limit_ms=45_000,
    module_path="trivia-pulse.js",
    weight=2,
    category=CompetitionCategory.TRIVIA,
)

NUMBER_TRIVIA = CompetitionDefinition(
    key="threeDigitsQuiz",
    title="Number Trivia",
    description="Answer numeric trivia questions with higher/lower hints",
    instructions=(
        "Three questions are presented in sequence",
        "Each question asks for a specific number",
        "Hints are provided with graded accuracy",
        "Submit your answer for each question",
    ),
    metric_kind=MetricKind.HYBRID,
    metric_label="Score",
    time_limit_ms=45_000,
    module_path="number-trivia-quiz.js",
    category=CompetitionCategory.TRIVIA,
)


# =============================================================================
# Arcade
# =============================================================================

QUICK_TAP = CompetitionDefinition(
    key="quickTap",
    title="Quick Tap Race",
    description="Tap as many times as possible within time limit",
    instructions=(
        "Timer starts when you begin tapping",
        "Tap anywhere on the screen rapidly",
        "Each tap counts toward your total",
        "Keep tapping until time expires",
    ),
    metric_kind=MetricKind.COUNT,
    metric_label="Taps",
    time_limit_ms=30_000,
    module_path="quick-tap.js",
    weight=2,
    category=CompetitionCategory.ARCADE,
)

TARGET_PRACTICE = CompetitionDefinition(
    key="targetPractice",
    title="Target Practice",
    description="Tap moving targets quickly",
    instructions=(
        "Targets appear and move on screen",
        "Tap each target before it disappears",
        "Targets may move at different speeds",
        "Hit as many targets as possible",
    ),
    metric_kind=MetricKind.COUNT,
    metric_label="Hits",
    time_limit_ms=45_000,
    module_path="target-practice.js",
    category=CompetitionCategory.ARCADE,
)

COLOR_MATCH = CompetitionDefinition(
    key="colorMatch",
    title="Color Match",
    description="Match colors quickly and accurately",
    instructions=(
        "A color appears on screen",
        "Select the matching color from options",
        "Tap the correct color quickly",
        "Complete as many matches as possible",
    ),
    metric_kind=MetricKind.COUNT,
    metric_label="Matches",
    time_limit_ms=30_000,
    module_path="color-match.js",
    category=CompetitionCategory.ARCADE,
)

SNAKE = CompetitionDefinition(
    key="snake",
    title="Snake",
    description="Classic snake game, eat food and grow",
    instructions=(
        "Snake moves continuously forward",
        "Change direction using controls",
        "Eat food to grow longer",
        "Avoid hitting walls or your own tail",
    ),
    metric_kind=MetricKind.POINTS,
    metric_label="Score",
    authoritative=True,
    scoring_adapter=ScoringAdapter.AUTHORITATIVE.value,
    module_path="snake.js",
    weight=2,
    category=CompetitionCategory.ARCADE,
)

FLASH_FLOOD = CompetitionDefinition(
    key="flashFlood",
    title="Flash Flood",
    description="React to flash patterns quickly",
    instructions=(
        "Patterns flash briefly on screen",
        "Memorize the highlighted areas",
        "Tap the areas that were highlighted",
        "Complete multiple patterns",
    ),
    metric_kind=MetricKind.TIME,
    metric_label="Reaction (ms)",
    time_limit_ms=45_000,
    scoring_adapter=ScoringAdapter.LOWER_BETTER.value,
    scoring_params=ScoringParams(target_ms=200, max_ms=2000),
    module_path="flash-flood.js",
    category=CompetitionCategory.ARCADE,
)

LASER_PANTRY_DASH = CompetitionDefinition(
    key="laserPantryDash",
    title="Laser Pantry Dash",
    description="Dodge lasers and collect recipe ingredients",
    instructions=(
        "Lasers sweep across the pantry floor",
        "Swipe to dodge and move your character",
        "Collect ingredient items scattered around",
        "Avoid getting hit and collect as many as possible",
    ),
    metric_kind=MetricKind.POINTS,
    metric_label="Items",
    time_limit_ms=45_000,
    module_path="laser-pantry-dash.js",
    category=CompetitionCategory.ARCADE,
)

CONFETTI_CANNON = CompetitionDefinition(
    key="confettiCannon",
    title="Confetti Cannon",
    description="Tap targets quickly while avoiding decoys",
    instructions=(
        "Confetti bursts and targets appear on screen",
        "Tap real targets and avoid decoys",
        "Correct taps earn points, wrong taps lose them",
        "Score as many points as possible",
    ),
    metric_kind=MetricKind.POINTS,
    metric_label="Score",
    time_limit_ms=30_000,
    module_path="confetti-cannon.js",
    category=CompetitionCategory.ARCADE,
)

BUZZER_SPRINT_RELAY = CompetitionDefinition(
    key="buzzerSprintRelay",
    title="Buzzer Sprint Relay",
    description="Memorize and repeat buzzer sequences quickly",
    instructions=(
        "A buzzer sequence is played",
        "Memorize the order of buzzers",
        "Repeat the sequence as fast as possible",
        "Multiple rounds with increasing complexity",
    ),
    metric_kind=MetricKind.TIME,
    metric_label="Time (s)",
    time_limit_ms=60_000,
    scoring_adapter=ScoringAdapter.LOWER_BETTER.value,
    scoring_params=ScoringParams(target_ms=3000, max_ms=60000),
    module_path="buzzer-sprint-relay.js",
    category=CompetitionCategory.ARCADE,
)


# =============================================================================
# Endurance
# =============================================================================

HOLD_WALL = CompetitionDefinition(
    key="holdWall",
    title="Hold Wall",
    description="Endurance wall hold, last as long as possible",
    instructions=(
        "Press and hold the screen to grip the wall",
        "Stay still, moving too much causes you to lose your grip",
        "AI opponents will randomly drop over time",
        "The challenge ends only when one player remains",
    ),
    metric_kind=MetricKind.ENDURANCE,
    metric_label="Time (s)",
    module_path="hold-wall.js",
    category=CompetitionCategory.ENDURANCE,
)

TILTED_LEDGE = CompetitionDefinition(
    key="tiltedLedge",
    title="The Tilted Ledge",
    description="Keep balance on a tilting ledge with telegraphed jerks",
    instructions=(
        "Hold your balance on a narrow ledge",
        "The ledge tilts and jerks unexpectedly",
        "Tap left or right to compensate",
        "Last as long as possible",
    ),
    metric_kind=MetricKind.ENDURANCE,
    metric_label="Time (s)",
    module_path="tilted-ledge.js",
    category=CompetitionCategory.ENDURANCE,
)

PRESSURE_PLANK = CompetitionDefinition(
    key="pressurePlank",
    title="Pressure Plank",
    description="Alternate hold/release to stay within a moving safe window",
    instructions=(
        "A safe zone moves across the screen",
        "Hold to press down, release to ease up",
        "Keep the indicator inside the safe zone",
        "Last as long as possible without leaving the zone",
    ),
    metric_kind=MetricKind.ENDURANCE,
    metric_label="Time (s)",
    module_path="pressure-plank.js",
    category=CompetitionCategory.ENDURANCE,
)

RAIN_BARREL_BALANCE = CompetitionDefinition(
    key="rainBarrelBalance",
    title="Rain Barrel Balance",
    description="Align center-of-mass with target zone while water sloshes",
    instructions=(
        "Water sloshes inside a barrel",
        "Tilt your device to move the center of mass",
        "Keep the center aligned with the target zone",
        "Last as long as possible",
    ),
    metric_kind=MetricKind.ENDURANCE,
    metric_label="Time (s)",
    module_path="rain-barrel-balance.js",
    category=CompetitionCategory.ENDURANCE,
)


# =============================================================================
# Collections
# =============================================================================

DEFAULT_COMPETITIONS: tuple[CompetitionDefinition, ...] = (
    COUNT_HOUSE,
    TRIVIA_PULSE,
    QUICK_TAP,
    MEMORY_MATCH,
    TIMING_BAR,
    WORD_ANAGRAM,
    TARGET_PRACTICE,
    ESTIMATION_GAME,
    HOLD_WALL,
    TILTED_LEDGE,
    PRESSURE_PLANK,
    RAIN_BARREL_BALANCE,
    MEMORY_ZIPLINE,
    SWIPE_MAZE,
    COLOR_MATCH,
    SOCIAL_STRINGS,
    LOGIC_LOCKS,
    SNAKE,
    CARD_CLASH,
    FLASH_FLOOD,
    GRID_LOCK,
    KEY_MASTER,
    HANGMAN,
    TILT_LABYRINTH,
    NUMBER_TRIVIA,
    TETRIS,
    TRAVELING_DOTS,
    MINESWEEPS,
    LASER_PANTRY_DASH,
    CONFETTI_CANNON,
    BUZZER_SPRINT_RELAY,
)
"""All built-in competitions in selection order."""
