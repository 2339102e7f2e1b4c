from railfence_tools.railfence import encrypt, decrypt
from railfence_tools.bruteforce import Attempt, AttackResult, BruteForceEngine, attack

__all__ = ["encrypt", "decrypt", "attack", "Attempt", "AttackResult", "BruteForceEngine"]
