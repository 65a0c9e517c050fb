# app.py
import os
import time
import sqlite3
from functools import wraps
from flask import Flask, request, jsonify

from strength.matches import InvalidMatch
from strength.password_strength import analyze_password

# ==== App bootstrap ====
app = Flask(__name__)
DB_PATH = os.environ.get("HISTORY_DB", "history.db")
API_KEY = os.environ.get("API_KEY")  # if set, protects every /api/ endpoint that writes
MAX_PASSWORD_LENGTH = int(os.environ.get("MAX_PASSWORD_LENGTH", 400))

# ==== DB helpers ====
def db():
    conn = sqlite3.connect(DB_PATH)
    conn.row_factory = sqlite3.Row
    return conn

def init_db():
    conn = db()
    conn.execute("""
      CREATE TABLE IF NOT EXISTS events(
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        time TEXT, ip TEXT, action TEXT, detail TEXT
      )
    """)
    conn.commit()
    conn.close()

init_db()

def log(action, detail=""):
    # never the password itself, only its shape
    conn = db()
    conn.execute(
        "INSERT INTO events(time, ip, action, detail) VALUES (?,?,?,?)",
        (time.strftime("%Y-%m-%d %H:%M:%S"), request.remote_addr, action, detail)
    )
    conn.commit()
    conn.close()

# ==== Security: API key + simple rate-limit ====
def require_api_key(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        if API_KEY:
            supplied = request.headers.get("X-API-Key") or request.args.get("api_key")
            if supplied != API_KEY:
                return jsonify({"error": "Unauthorized"}), 401
        return fn(*args, **kwargs)
    return wrapper

_RATE = {}
def rate_limit(name, limit=20, per_sec=60):
    def deco(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            ip = request.remote_addr or "?"
            now = time.time()
            key = (ip, name)
            # forget clients whose whole window has expired
            for stale in [k for k, ts in _RATE.items() if k[1] == name and now - ts[-1] >= per_sec]:
                del _RATE[stale]
            timestamps = [t for t in _RATE.get(key, []) if now - t < per_sec]
            if len(timestamps) >= limit:
                return jsonify({"error": f"Rate limit exceeded for {name}"}), 429
            timestamps.append(now)
            _RATE[key] = timestamps
            return fn(*args, **kwargs)
        return wrapper
    return deco

# ---------- Analysis ----------
@app.route("/api/analyze", methods=["POST"])
@require_api_key
@rate_limit("analyze", limit=25, per_sec=60)
def api_analyze():
    payload = request.get_json(silent=True) or {}

    pw = payload.get("password")
    if not isinstance(pw, str):
        return jsonify({"error": "password required"}), 400
    if len(pw) > MAX_PASSWORD_LENGTH:
        return jsonify({"error": f"password longer than {MAX_PASSWORD_LENGTH} characters"}), 400
    matches = payload.get("matches") or []
    if not isinstance(matches, list):
        return jsonify({"error": "matches must be a list"}), 400

    # Accept both algorithm and legacy hash_algo key
    algo = payload.get("algorithm") or payload.get("hash_algo")
    hw = payload.get("hardware")

    try:
        analysis = analyze_password(pw, matches, hash_algo=algo, hardware=hw)
    except InvalidMatch as e:
        log("Analyze Password (rejected)", f"len={len(pw)}, matches={len(matches)}")
        return jsonify({"error": f"invalid match: {e}"}), 422

    log("Analyze Password", f"len={len(pw)}, matches={len(matches)}, score={analysis['score']}")
    return jsonify(analysis)

# ---------- History ----------
@app.route("/api/history")
def api_history():
    conn = db()
    rows = conn.execute("SELECT time, action, detail FROM events ORDER BY id DESC LIMIT 200").fetchall()
    conn.close()
    return jsonify([dict(r) for r in rows])

@app.route("/api/health")
def api_health():
    return jsonify({"ok": True, "t": time.time()})

@app.route("/api/history/clear", methods=["POST"])
@require_api_key
def api_clear_history():
    conn = db()
    conn.execute("DELETE FROM events")
    conn.commit()
    conn.close()
    log("History Cleared")
    return jsonify({"status": "cleared"})

if __name__ == "__main__":
    app.run(host="0.0.0.0", port=int(os.environ.get("PORT", 5000)), debug=True)
