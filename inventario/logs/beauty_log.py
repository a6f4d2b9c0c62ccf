import logging
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger("inventario.beauty")


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    handlers = [logging.StreamHandler()]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=level.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
    )


def beauty_var_log(header: str, o: Any, level: int = logging.DEBUG) -> None:
    if not logger.isEnabledFor(level):
        return

    lines = [f"=================[ {header} ]================="]
    if isinstance(o, dict):
        for key, value in o.items():
            lines.append(f"{key}: {value}")
    elif isinstance(o, list):
        for i, item in enumerate(o):
            lines.append(f"[{i}] {item}")
    else:
        lines.append(str(type(o)))
        lines.append(str(o))
    lines.append("---------------------------------------------------")

    logger.log(level, "\n".join(lines))
