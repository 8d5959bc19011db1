import os
from datetime import datetime, timezone
from dotenv import load_dotenv
from flask import Flask, request, session, jsonify

from game_config import ConfigError, get_game_config
from remote_generator import RemoteGenerator, generate_with_fallback
from sudoku_generator import Progress, board_shape_ok, check_progress, reveal_hint

load_dotenv()

app = Flask(__name__)
app.secret_key = os.getenv("FLASK_SECRET_KEY", "dev-secret")

# Generator config
REMOTE_GENERATOR_URL = os.getenv("REMOTE_GENERATOR_URL", "")
REMOTE_GENERATOR_TIMEOUT = float(os.getenv("REMOTE_GENERATOR_TIMEOUT", "5"))
DEFAULT_GAME_MODE = os.getenv("DEFAULT_GAME_MODE", "4x4")

CHECK_MESSAGES = {
    Progress.WRONG: "Something is not correct. Keep trying!",
    Progress.IN_PROGRESS: "So far so good! Keep going.",
    Progress.SOLVED: "Congratulations! You solved it!",
}

# Fail at startup rather than on the first request
get_game_config(DEFAULT_GAME_MODE)

def get_remote_generator():
    if not REMOTE_GENERATOR_URL:
        return None
    return RemoteGenerator(REMOTE_GENERATOR_URL, timeout=REMOTE_GENERATOR_TIMEOUT)

def active_puzzle():
    """Return (config, solution) for the puzzle stored in the session, or None."""
    solution = session.get("last_solution")
    mode = session.get("last_mode")
    if solution is None or mode is None:
        return None
    return get_game_config(mode), solution

def read_board(config):
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return None
    board = data.get("board")
    if not board_shape_ok(board, config):
        return None
    return board

@app.errorhandler(ConfigError)
def handle_config_error(e):
    return jsonify({"error": str(e)}), 400

# Sudoku API
@app.route("/api/new_puzzle")
def api_new_puzzle():
    level = request.args.get("level", "easy").lower()
    if level not in ("easy", "medium", "hard"):
        level = "easy"
    mode = request.args.get("mode", DEFAULT_GAME_MODE)
    (puzzle, solution), source, error = generate_with_fallback(level, mode, get_remote_generator())
    if error is not None:
        app.logger.info("Remote generator unavailable, using offline mode: %s", error)
    # store solution in session for hints and checks
    session["last_solution"] = solution
    session["last_mode"] = mode
    return jsonify({"level": level, "mode": mode, "source": source, "puzzle": puzzle, "solution": solution})

@app.route("/api/hint", methods=["POST"])
def api_hint():
    active = active_puzzle()
    if active is None:
        return jsonify({"error": "No active puzzle. Start a new game first."}), 400
    config, solution = active
    board = read_board(config)
    if board is None:
        return jsonify({"error": f"Expected a {config.mode} board."}), 400
    hint = reveal_hint(board, solution)
    if hint is None:
        return jsonify({"hint": None, "board": board, "message": "No empty cells left to give a hint!"})
    row, col, value = hint
    response = {"hint": {"row": row, "col": col, "value": value}, "board": board}
    status = check_progress(board, solution)
    response["status"] = status.value
    if status is Progress.SOLVED:
        response["message"] = CHECK_MESSAGES[status]
    return jsonify(response)

@app.route("/api/check", methods=["POST"])
def api_check():
    active = active_puzzle()
    if active is None:
        return jsonify({"error": "No active puzzle. Start a new game first."}), 400
    config, solution = active
    board = read_board(config)
    if board is None:
        return jsonify({"error": f"Expected a {config.mode} board."}), 400
    status = check_progress(board, solution)
    return jsonify({"status": status.value, "message": CHECK_MESSAGES[status]})

@app.route("/api/solve", methods=["POST"])
def api_solve():
    active = active_puzzle()
    if active is None:
        return jsonify({"error": "No active puzzle. Start a new game first."}), 400
    _, solution = active
    return jsonify({"board": solution, "message": "Puzzle solved!"})

# Webhook
@app.route("/api/webhook", methods=["GET", "POST"])
def webhook():
    if request.method == "GET":
        return jsonify({
            "message": "Mini Sudoku Webhook Active",
            "status": "working",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        })
    body = request.get_json(silent=True)
    if body is None:
        return jsonify({"error": "Invalid JSON"}), 400
    app.logger.info("Webhook received: %s", body)
    return jsonify({"message": "Webhook received successfully", "status": "ok"})

if __name__ == "__main__":
    app.run(debug=True)
