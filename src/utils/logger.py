from datetime import datetime
from typing import Callable, List, Optional
from models.enums import LogLevel, LogCategory

# Sink signature: sink(timestamp=..., level=..., category=..., message=..., details=[...])
LogSink = Callable[..., None]


# === ANSI COLORS ===
class Colors:
    """ANSI escape codes used by the console output"""
    RESET = '\033[0m'
    DIM = '\033[2m'

    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    MAGENTA = '\033[35m'
    CYAN = '\033[36m'
    WHITE = '\033[37m'

    BRIGHT_BLUE = '\033[94m'
    BRIGHT_CYAN = '\033[96m'
    BRIGHT_WHITE = '\033[97m'
    BRIGHT_YELLOW = '\033[93m'


CATEGORY_COLORS = {
    LogCategory.CONFIG: Colors.CYAN,
    LogCategory.SEQUENCE: Colors.BRIGHT_CYAN,
    LogCategory.MAPPING: Colors.BRIGHT_BLUE,
    LogCategory.ANIMATION: Colors.BRIGHT_YELLOW,
    LogCategory.RENDER_ENGINE: Colors.MAGENTA,
    LogCategory.SYSTEM: Colors.BRIGHT_WHITE,
}

# level -> (priority, symbol, color)
LEVEL_STYLES = {
    LogLevel.DEBUG: (0, '·', Colors.DIM),
    LogLevel.INFO: (1, '✓', Colors.GREEN),
    LogLevel.WARN: (2, '⚠', Colors.YELLOW),
    LogLevel.ERROR: (3, '✗', Colors.RED),
}

DETAIL_INDENT = " " * 11


# === LEVEL HELPERS ===
def _emitter(level: LogLevel):
    """Level helper for Logger: (category, message, **details)"""
    def emit(self, category: LogCategory, message: str, **kw):
        self.log(category, message, level, **kw)
    emit.__name__ = level.name.lower()
    return emit


def _bound_emitter(level: LogLevel):
    """Level helper for BoundLogger: (message, **details) in the bound category"""
    def emit(self, message: str, **kw):
        self._base.log(self.category, message, level, **kw)
    emit.__name__ = level.name.lower()
    return emit


# === CORE LOGGER ===
class Logger:
    """
    Structured logger with compact output format

    Format:
    [HH:MM:SS] CATEGORY · Message
               ├─ key: value
               └─ key: value

    Example:
    [14:23:45] SEQUENCE  ⚠ Could not find gating step, step will be ignored
               ├─ step_index: 3
               └─ on_completion_of: 9

    Besides the console, every record that passes the level filter can be
    handed to a sink (any callable taking keyword arguments). Tests and
    external collectors attach one to observe diagnostics.
    """

    debug = _emitter(LogLevel.DEBUG)
    info = _emitter(LogLevel.INFO)
    warn = _emitter(LogLevel.WARN)
    error = _emitter(LogLevel.ERROR)

    def __init__(self, min_level: LogLevel = LogLevel.INFO, use_colors: bool = True, echo: bool = True):
        """
        Args:
            min_level: Records below this level are discarded
            use_colors: ANSI colors on the console (disable for file output)
            echo: Print records to stdout
        """
        self.min_level = min_level
        self.use_colors = use_colors
        self.echo = echo
        self._sink: Optional[LogSink] = None

    def set_sink(self, sink: Optional[LogSink]) -> None:
        """Forward every emitted record to `sink`; None detaches it"""
        self._sink = sink

    def _enabled(self, level: LogLevel) -> bool:
        return LEVEL_STYLES[level][0] >= LEVEL_STYLES[self.min_level][0]

    def _paint(self, text: str, color: str) -> str:
        if not self.use_colors:
            return text
        return f"{color}{text}{Colors.RESET}"

    def _render(self, category: LogCategory, level: LogLevel, message: str, details: List[str]) -> List[str]:
        """Console lines for one record: headline plus one tree line per detail"""
        _, symbol, level_color = LEVEL_STYLES[level]
        stamp = datetime.now().strftime('[%H:%M:%S]')
        cat = self._paint(category.name.ljust(9), CATEGORY_COLORS.get(category, Colors.WHITE))

        lines = [f"{stamp} {cat} {self._paint(symbol, level_color)} {self._paint(message, level_color)}"]
        last = len(details) - 1
        for i, detail in enumerate(details):
            branch = "└─" if i == last else "├─"
            lines.append(f"{DETAIL_INDENT}{self._paint(branch, Colors.DIM)} {detail}")
        return lines

    def log(
        self,
        category: LogCategory,
        message: str,
        level: LogLevel = LogLevel.INFO,
        details: Optional[list] = None,
        **kwargs
    ):
        """
        Log a structured message

        Args:
            category: Log category (SEQUENCE, MAPPING, etc.)
            message: Main message text
            level: Log level (DEBUG, INFO, WARN, ERROR)
            details: Detail strings shown below the message
            **kwargs: Extra details, rendered as "key: value"

        Example:
            logger.log(LogCategory.MAPPING, "Universe registered", name="base1", pixels=30)
        """
        if not self._enabled(level):
            return

        all_details = list(details or [])
        all_details.extend(f"{k}: {v}" for k, v in kwargs.items())

        if self.echo:
            print("\n".join(self._render(category, level, message, all_details)))

        if self._sink:
            self._sink(
                timestamp=datetime.now().isoformat(),
                level=level,
                category=category,
                message=message,
                details=all_details,
            )

    def for_category(self, category: LogCategory) -> 'BoundLogger':
        """Logger bound to one category, handed to components as their diagnostic sink"""
        return BoundLogger(self, category)


class BoundLogger:
    """
    Logger view with a fixed category.

    Components take one of these as their `log` argument; anything exposing
    debug/info/warn/error(message, **details) can stand in for it.
    """

    debug = _bound_emitter(LogLevel.DEBUG)
    info = _bound_emitter(LogLevel.INFO)
    warn = _bound_emitter(LogLevel.WARN)
    error = _bound_emitter(LogLevel.ERROR)

    def __init__(self, base: Logger, category: LogCategory):
        self._base = base
        self.category = category

    def log(self, message: str, level: LogLevel = LogLevel.INFO, category: Optional[LogCategory] = None, **kw):
        """Emit at an explicit level, optionally under another category"""
        self._base.log(category or self.category, message, level, **kw)

    def with_category(self, category: LogCategory) -> 'BoundLogger':
        return self._base.for_category(category)

    def __repr__(self) -> str:
        return f"BoundLogger({self.category.name})"


# === Global instance helpers ===
_logger = Logger()

def get_logger() -> Logger:
    return _logger

def get_category_logger(category: LogCategory) -> BoundLogger:
    return _logger.for_category(category)

def configure_logger(min_level: LogLevel = LogLevel.INFO, use_colors: bool = True, echo: bool = True):
    """
    Reconfigure the singleton in place.

    The attached sink and every BoundLogger handed out earlier stay valid.
    """
    _logger.min_level = min_level
    _logger.use_colors = use_colors
    _logger.echo = echo
