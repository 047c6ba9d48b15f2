import os


class Config:
    # Length of one round (seconds)
    ROUND_DURATION_SEC = int(os.environ.get('TICTAC_ROUND_DURATION_SEC', '180'))
    # Wall-clock seconds between countdown ticks
    TICK_INTERVAL_SEC = float(os.environ.get('TICTAC_TICK_INTERVAL_SEC', '1.0'))
    # 'server': background thread ticks the clock. 'client': ticks arrive via POST /api/tick
    CLOCK_MODE = os.environ.get('TICTAC_CLOCK_MODE', 'server').lower()
    LOG_LEVEL = os.environ.get('TICTAC_LOG_LEVEL', 'INFO').upper()

    LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
