import logging
import sys
from pathlib import Path


def setup_logging(log_dir: str | Path = "logs", level: int = logging.INFO):
    """
    Настраивает глобальный логгер конвертера.
    - Устанавливает формат сообщений.
    - Выводит логи в консоль (stdout).
    - Сохраняет логи в файл logs/converter.log.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "converter.log"

    logging.basicConfig(
        level=level,
        format="%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s:%(lineno)d | %(message)s",
        datefmt="%H:%M:%S",
        handlers=[
            logging.FileHandler(log_file, mode="w", encoding="utf-8"),
            logging.StreamHandler(sys.stdout),
        ],
        force=True,  # убирает старые хендлеры, чтобы не было дублей
    )

    # детальные логи только нашего пакета, остальное приглушим
    logging.getLogger("wbox_engine").setLevel(level)
    logging.getLogger("numba").setLevel(logging.WARNING)
    logging.getLogger("PIL").setLevel(logging.WARNING)
