# strength/crack_time.py
import math
from dataclasses import dataclass

# guesses per second for each attacker model
ATTACKER_MODELS = {
    "online_throttled": 100 / 3600,       # 100 per hour, rate-limited login form
    "online_unthrottled": 10,
    "offline_slow_hash": 1e4,             # bcrypt/scrypt/PBKDF2, many cores
    "offline_fast_hash": 1e10,            # unsalted md5/sha1 on GPUs
}

SCORE_THRESHOLDS = (1e3, 1e6, 1e8, 1e10)

MINUTE = 60
HOUR = MINUTE * 60
DAY = HOUR * 24
MONTH = DAY * 31
YEAR = MONTH * 12
CENTURY = YEAR * 100


@dataclass(frozen=True)
class CrackTime:
    seconds: float
    display: str


def guesses_to_score(guesses: float) -> int:
    score = 0
    for threshold in SCORE_THRESHOLDS:
        if guesses < threshold:
            return score
        score += 1
    return score


def display_time(seconds: float) -> str:
    if seconds < 1:
        return "instant"
    if seconds < MINUTE:
        base, unit = round(seconds), "second"
    elif seconds < HOUR:
        base, unit = round(seconds / MINUTE), "minute"
    elif seconds < DAY:
        base, unit = round(seconds / HOUR), "hour"
    elif seconds < MONTH:
        base, unit = round(seconds / DAY), "day"
    elif seconds < YEAR:
        base, unit = round(seconds / MONTH), "month"
    elif seconds < CENTURY:
        base, unit = round(seconds / YEAR), "year"
    else:
        return "centuries"
    return f"{base} {unit}{'' if base == 1 else 's'}"


def estimate_crack_times(guesses: float) -> dict:
    return {
        name: CrackTime(seconds=guesses / rate, display=display_time(guesses / rate))
        for name, rate in ATTACKER_MODELS.items()
    }


# ---------- caller-chosen attacker ----------

SPEED_TABLE = {
    "cpu":           {"md5": 30_000_000, "sha1": 20_000_000, "sha256": 5_000_000, "sha512": 2_000_000, "bcrypt": 300},
    "gpu-consumer":  {"md5": 10_000_000_000, "sha1": 3_000_000_000, "sha256": 1_000_000_000, "sha512": 300_000_000, "bcrypt": 1500},
    "gpu-enthusiast": {"md5": 25_000_000_000, "sha1": 8_000_000_000, "sha256": 2_500_000_000, "sha512": 800_000_000, "bcrypt": 3000},
}


def estimate_speed(hash_algo: str, hardware: str) -> float:
    """
    Rough guesses per second for a hash on some hardware class.
    Unknown hardware falls back to a consumer GPU, unknown hashes to 1M/s.
    """
    ha = (hash_algo or "sha256").lower()
    hw = (hardware or "gpu-consumer").lower()
    return SPEED_TABLE.get(hw, SPEED_TABLE["gpu-consumer"]).get(ha, 1_000_000)


def custom_crack_time(guesses: float, hash_algo: str = None, hardware: str = None) -> CrackTime:
    seconds = guesses / max(1.0, estimate_speed(hash_algo, hardware))
    return CrackTime(seconds=seconds, display=display_time(seconds))


def guesses_log10(guesses: float) -> float:
    return math.log10(max(guesses, 1.0))
