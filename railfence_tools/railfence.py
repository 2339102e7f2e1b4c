"""
Rail fence transposition.

Characters are written along a zig-zag across `rails` rows and read back
row by row. Both directions are length-preserving and never pad.
A rail count outside 2..len-1 leaves the message untouched.
"""


def _degenerate(message: str, rails: int) -> bool:
    return rails <= 1 or rails >= len(message)


def zigzag(length: int, rails: int) -> list:
    """Row index of every position 0..length-1 (0, 1, .., rails-1, .., 1, 0, 1, ..)."""
    pattern = []
    row = 0
    direction = 1  # +1 heading to the bottom rail
    for _ in range(length):
        pattern.append(row)
        if row == 0:
            direction = 1
        elif row == rails - 1:
            direction = -1
        row += direction
    return pattern


def encrypt(plaintext: str, rails: int) -> str:
    if _degenerate(plaintext, rails):
        return plaintext

    fence = [[] for _ in range(rails)]
    for ch, r in zip(plaintext, zigzag(len(plaintext), rails)):
        fence[r].append(ch)

    return "".join("".join(row) for row in fence)


def decrypt(ciphertext: str, rails: int) -> str:
    n = len(ciphertext)
    if _degenerate(ciphertext, rails):
        return ciphertext

    pattern = zigzag(n, rails)

    # rail sizes
    row_counts = [0] * rails
    for r in pattern:
        row_counts[r] += 1

    # ciphertext is the rails laid end to end
    rows = []
    idx = 0
    for count in row_counts:
        rows.append(ciphertext[idx:idx + count])
        idx += count

    # each position takes the next unused char of its rail
    row_ptrs = [0] * rails
    out_chars = []
    for r in pattern:
        out_chars.append(rows[r][row_ptrs[r]])
        row_ptrs[r] += 1

    return "".join(out_chars)
