from __future__ import annotations
import logging
import random

from flask import Flask, request, jsonify
from flask_cors import CORS

from backtrack_sudoku.checker import find_conflicts, is_complete, is_solved, validate_rules
from backtrack_sudoku.config import Settings
from backtrack_sudoku.generator import Generator
from backtrack_sudoku.grid import Grid
from backtrack_sudoku.models import GenerationError
from backtrack_sudoku.solver import solve

log = logging.getLogger(__name__)

app = Flask(__name__)
app.config["MAX_GENERATION_ATTEMPTS"] = None  # overridden from Settings in __main__
CORS(app)


def _body() -> dict:
    data = request.get_json(force=True, silent=True)
    return data if isinstance(data, dict) else {}


def _grid_field(data: dict, name: str, lock: bool = False) -> Grid:
    v = data.get(name, "")
    if not isinstance(v, str):
        raise ValueError(f"'{name}' must be an 81-character string")
    return Grid.from_string(v, lock=lock)


def _int_field(data: dict, name: str) -> int:
    v = data.get(name)
    if v is None:
        raise ValueError(f"'{name}' is required")
    if isinstance(v, bool) or not isinstance(v, int):
        raise ValueError(f"'{name}' must be an integer")
    return v


@app.get("/health")
def health():
    return jsonify({"ok": True})


@app.post("/validate")
def validate():
    """
    Report duplicates in a (possibly partial) grid.
    conflicts: every cell whose digit repeats in its row/col/box (1-indexed).
    """
    try:
        grid = _grid_field(_body(), "grid")
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    rules = validate_rules(grid)
    return jsonify({
        "complete": is_complete(grid),
        "solved": is_solved(grid),
        "valid": rules.is_valid,
        "conflict_type": rules.conflict_type.value,
        "conflicts": [
            {"r": r + 1, "c": c + 1, "digit": d}
            for (r, c, d) in find_conflicts(grid)
        ],
    })


@app.post("/solve")
def solve_givens():
    try:
        givens = _grid_field(_body(), "givens", lock=True)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    solution = solve(givens)
    if not is_solved(solution):
        return jsonify({"ok": False, "solution81": None})
    return jsonify({"ok": True, "solution81": solution.to_string()})


@app.post("/generate")
def generate():
    try:
        data = _body()
        seeds = _int_field(data, "seeds")
        rng = random.Random(_int_field(data, "rng_seed")) if "rng_seed" in data else None
        gen = Generator(seeds, rng=rng, max_attempts=app.config.get("MAX_GENERATION_ATTEMPTS"))
        result = gen.generate()
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except GenerationError as e:
        log.warning("Generation gave up: %s", e)
        return jsonify({"error": str(e)}), 400

    return jsonify({
        "puzzle81": result.puzzle.to_string(),
        "solution81": result.solution.to_string(),
        "attempts": result.attempts,
    })


if __name__ == "__main__":
    settings = Settings.from_env()
    app.config["MAX_GENERATION_ATTEMPTS"] = settings.max_generation_attempts
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    app.run(host=settings.api_host, port=settings.api_port, debug=settings.api_debug)
