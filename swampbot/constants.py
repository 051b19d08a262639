"""System-wide constants and default tunables.

Purpose: Centralize all magic numbers, squad compositions, spawn bodies and radii across the bot
Key Decisions: Plain module-level defaults; BotConfig copies them and config.yml may override
Limitations: None - pure data definitions

Organization:
- Pathing constants (refresh interval, drift tolerance)
- Squad and deployment configuration (name pool, wave compositions)
- Engagement ranges (detection, cohesion, flee, base defense)
- Flanking parameters
- Production and construction plans
"""

from swampbot.arena import BodyPart

# ===== PATHING =====
PATH_REFRESH_INTERVAL = 6
"""Ticks a cached path stays valid before it is recomputed"""

PATH_DRIFT_TOLERANCE = 1
"""Max cells a unit may stray from the cell its path cursor predicts before the path is dropped"""

# ===== SQUAD CONFIGURATION =====
SQUAD_NAMES: tuple[str, ...] = (
    "Alpha",
    "Bravo",
    "Charlie",
    "Delta",
    "Echo",
    "Foxtrot",
    "Golf",
    "Hotel",
)
"""Ordered squad name pool - reused cyclically once exhausted"""

FIRST_WAVE_FIGHTERS = 5
"""Fighters released together in the opening wave"""

FIRST_WAVE_MEDICS = 1
"""Medics released with the opening wave"""

WAVE_FIGHTERS = 3
"""Fighters per steady-state reinforcement wave"""

WAVE_MEDICS = 1
"""Medics per steady-state reinforcement wave"""

FLANK_WAVE_FIGHTERS = 2
"""Fighters in the fast flanking sub-squad"""

FLANK_WAVE_MEDICS = 0
"""Medics in the fast flanking sub-squad"""

# ===== ENGAGEMENT RANGES =====
DETECTION_RADIUS = 10
"""Range at which a squad leader picks up enemies as focus targets"""

COHESION_RADIUS = 4
"""Followers farther than this from their leader regroup before anything else"""

MELEE_RANGE = 1
"""Range of ATTACK, HEAL, BUILD, HARVEST, WITHDRAW and TRANSFER"""

RANGED_RANGE = 3
"""Range of RANGED_ATTACK and RANGED_HEAL"""

FLEE_RADIUS = 6
"""Gatherers retreat to the spawn when an armed enemy comes this close"""

GATHERER_SAFE_RANGE = 1
"""A fleeing gatherer stops once it is this close to the spawn"""

BASE_DEFENSE_RADIUS = 5
"""Reserve medics engage enemies within this range of the home spawn"""

RESERVE_HEAL_RADIUS = 10
"""Reserve medics only look for wounded friendlies this close to themselves"""

HOLD_RANGE = 3
"""Reserve units drift back to the spawn when farther than this"""

MEDIC_FOLLOW_DISTANCE = 1
"""Deployed medics keep within this range of the unit they are covering"""

# ===== FLANKING =====
FLANK_REACHED_RADIUS = 3
"""A flanker within this range of the waypoint moves on to stage 2"""

FLANK_WAYPOINT_RETRIES = 3
"""Consecutive ticks without a path to the waypoint before a flanker skips to stage 2"""

FLANK_EDGE_MARGIN = 10
"""Waypoint distance from the map edge on the enemy side"""

FLANK_LATERAL_OFFSET = 30
"""Waypoint distance from the center line on the opposite lateral half"""

MAP_WIDTH = 100
"""Arena width in cells"""

MAP_HEIGHT = 100
"""Arena height in cells"""

# ===== PRODUCTION =====
GATHERER_BODY: tuple[BodyPart, ...] = (BodyPart.CARRY, BodyPart.CARRY, BodyPart.MOVE, BodyPart.MOVE)
FIGHTER_BODY: tuple[BodyPart, ...] = (BodyPart.MOVE, BodyPart.MOVE, BodyPart.ATTACK, BodyPart.ATTACK)
MEDIC_BODY: tuple[BodyPart, ...] = (BodyPart.MOVE, BodyPart.HEAL)

GATHERER_TARGET = 3
"""Gatherers spawned before anything else"""

FIGHTER_TARGET = 10
"""Fighters spawned before medics"""

MEDIC_TARGET = 5
"""Medics spawned before falling back to endless fighters"""

# ===== CONSTRUCTION =====
MAX_EXTENSIONS = 5
"""Extensions kept around the spawn (built + planned)"""

EXTENSION_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (1, -1),
    (-1, 1),
    (1, 1),
    (0, -1),
)
"""Spawn-relative cells checked in order for extension sites"""

TOWER_OFFSET = (2, 0)
"""Spawn-relative cell of the defensive tower"""

# ===== REPORTING =====
REPORT_INTERVAL = 300
"""Ticks between periodic status reports"""

MONITOR_ALPHA = 0.1
"""EMA smoothing factor for the performance monitor"""
