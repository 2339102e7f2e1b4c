from dotenv import load_dotenv
load_dotenv()
import logging

import click
from flask import Flask, request, jsonify

from railfence_tools.bruteforce import BruteForceEngine
from railfence_tools.config import Settings
from railfence_tools.dictionary import build_dictionary
from railfence_tools.railfence import encrypt, decrypt
from railfence_tools.scoring import LexicalScorer

TOP_RESULTS = 10

# ----- Configuration -----
settings = Settings.from_env()
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = Flask(__name__)

dictionary = build_dictionary(settings)
scorer = LexicalScorer(dictionary, max_checks=settings.max_checks)
engine = BruteForceEngine(scorer, workers=settings.workers)


# ----- Input validation -----
def require_text(text, what):
    if not text or not text.strip():
        raise ValueError(f"Please enter {what}")
    return text


def parse_rails(value, text_length):
    """Rails must be an integer in 2 .. text_length - 1 (text_length floored at 3)."""
    limit = max(text_length, 3)
    try:
        rails = int(str(value).strip())
    except (TypeError, ValueError):
        rails = None
    if rails is None or rails < 2 or rails >= limit:
        raise ValueError("Rails must be between 2 and message length - 1")
    return rails


def parse_max_rails(value):
    if value is None or str(value).strip() == "":
        return None
    try:
        max_rails = int(str(value).strip())
    except ValueError:
        max_rails = 0
    if max_rails < 1:
        raise ValueError("Max rails must be a positive whole number")
    return max_rails


# ------------------- Main Cipher Route -------------------
@app.route("/", methods=["POST"])
def index():
    text = request.form.get("text", "")
    mode = request.form.get("mode", "bruteforce").lower()

    try:
        if mode == "encrypt":
            require_text(text, "a message to encrypt")
            rails = parse_rails(request.form.get("rails"), len(text))
            return jsonify({"mode": mode, "rails": rails, "text": encrypt(text, rails)})

        if mode == "decrypt":
            require_text(text, "ciphertext to decrypt")
            rails = parse_rails(request.form.get("rails"), len(text))
            return jsonify({"mode": mode, "rails": rails, "text": decrypt(text, rails)})

        if mode == "bruteforce":
            require_text(text, "ciphertext to crack")
            max_rails = parse_max_rails(request.form.get("max_rails"))
            result = engine.attack(text, max_rails)
            if result.best is None or not result.attempts:
                return jsonify({"error": "No results found"}), 404
            return jsonify(result.as_dict(top=TOP_RESULTS))

    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    return jsonify({"error": f"Unknown mode: {mode}"}), 400


@app.route("/health", methods=["GET"])
def health():
    return jsonify({"status": "ok", "dictionary": dictionary.name})


# ------------------- Command line -------------------
@app.cli.command("encrypt")
@click.argument("text")
@click.option("-r", "--rails", required=True, help="Number of rails.")
def encrypt_command(text, rails):
    """Encrypt TEXT with the rail fence cipher."""
    try:
        click.echo(encrypt(text, parse_rails(rails, len(text))))
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--rails")


@app.cli.command("decrypt")
@click.argument("text")
@click.option("-r", "--rails", required=True, help="Number of rails.")
def decrypt_command(text, rails):
    """Decrypt TEXT with a known rail count."""
    try:
        click.echo(decrypt(text, parse_rails(rails, len(text))))
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--rails")


@app.cli.command("crack")
@click.argument("text")
@click.option("--max-rails", type=int, default=None, help="Highest rail count to try.")
@click.option("--top", type=int, default=TOP_RESULTS, show_default=True,
              help="How many ranked attempts to print.")
def crack_command(text, max_rails, top):
    """Brute force every rail count and rank the guesses."""
    if len(text.strip()) < 3:
        raise click.BadParameter("Ciphertext is too short (minimum 3 characters).",
                                 param_hint="TEXT")

    result = engine.attack(text, max_rails)
    if result.best is None:
        click.echo("No results found")
        return

    for attempt in result.attempts[:top]:
        marker = ">>> " if attempt is result.best else "    "
        click.echo(f"{marker}Rails {attempt.rails:>3}  Score {attempt.score:8.2f}  {attempt.plaintext}")

    click.echo("")
    click.echo(f"Total attempts: {len(result.attempts)}")
    click.echo(f"Best guess - Rails: {result.best.rails}")
    click.echo(f"Best guess - Message: {result.best.plaintext}")


if __name__ == "__main__":
    app.run(debug=True)
