# risk_board.py
"""Collaborative life-risk board backed by Firebase Realtime Database.

Layout under the database root:

    work/{session_id}/panels/{panel_id} = {text, x, y, width, height,
                                           userId, userName, createdAt, updatedAt}
    work/{session_id}/users/{user_id}   = {userName, lastSeen}

Local state is changed first and pushed afterwards. Geometry writes (move and
resize) go through a per-panel throttle; everything else is written at once.
Timestamps are epoch milliseconds.
"""

import json
import logging
import os
import random
import string
import time

logger = logging.getLogger(__name__)

DATA_DIR = os.environ.get("LIFEPLAN_DATA_DIR", ".lifeplan_data")

DEFAULT_USER_NAME = "ユーザー"
NEW_PANEL_TEXT = "新しいリスク"
NEW_PANEL_GEOMETRY = {"x": 400, "y": 300, "width": 200, "height": 40}

PANEL_HEIGHT = 40
PANEL_SPACING = 2
PANEL_ORIGIN = (20, 20)
PANEL_MIN_WIDTH = 60
PANEL_MAX_WIDTH = 250
RESIZE_MIN_WIDTH = 100
CHAR_WIDTH = 16.5
PANEL_PADDING = 16

THROTTLE_SECONDS = 0.1
HEARTBEAT_SECONDS = 30
ACTIVE_USER_SECONDS = 5 * 60

INITIAL_PANEL_PREFIX = "initial-panel-"

# shortest first
INITIAL_PANEL_TEXTS = [
    "骨折",
    "上皮内がん",
    "長期の入院",
    "短期の入院",
    "介護費用 (将来的)",
    "火災などの住宅損傷",
    "風邪やインフルエンザ",
    "パートナーの早期死亡",
    "パートナーの介護/障害",
    "旅行のキャンセル費用",
    "ステージの進んだがん",
    "交通事故による高額賠償",
    "自動車の軽微な物損事故",
]

# board quadrants: top = frequent, right = large loss
QUADRANTS = {
    "frequent_small": {"label": "よくある / 困らない", "advice": "貯蓄（生活防衛資金）で対応"},
    "frequent_large": {"label": "よくある / 困る", "advice": "予防と貯蓄/保険の両輪"},
    "rare_small": {"label": "まれに / 困らない", "advice": "貯蓄で対応、または許容"},
    "rare_large": {"label": "まれに / 困る", "advice": "保険で備える"},
}

BOARD_SIZE = (1000, 700)

_BASE36 = string.digits + string.ascii_lowercase


class PanelNotFoundError(KeyError):
    pass


def now_ms(clock=time.time):
    return int(clock() * 1000)


def generate_id(prefix, timestamp_ms=None, rng=random):
    """'{prefix}-{ms}-{9 base36 chars}', e.g. session-1718000000000-k3j9x0a1b."""
    timestamp_ms = now_ms() if timestamp_ms is None else timestamp_ms
    suffix = "".join(rng.choice(_BASE36) for _ in range(9))
    return f"{prefix}-{timestamp_ms}-{suffix}"


def new_session_id(timestamp_ms=None):
    return generate_id("session", timestamp_ms)


def new_user_id(timestamp_ms=None):
    return generate_id("user", timestamp_ms)


def calculate_panel_width(text):
    width = len(text) * CHAR_WIDTH + PANEL_PADDING
    return max(PANEL_MIN_WIDTH, min(PANEL_MAX_WIDTH, width))


def initial_panels(user_id, user_name, timestamp_ms):
    base_x, base_y = PANEL_ORIGIN
    panels = {}
    for index, text in enumerate(INITIAL_PANEL_TEXTS):
        panels[f"{INITIAL_PANEL_PREFIX}{timestamp_ms}-{index}"] = {
            "text": text,
            "x": base_x,
            "y": base_y + (PANEL_HEIGHT + PANEL_SPACING) * index,
            "width": calculate_panel_width(text),
            "height": PANEL_HEIGHT,
            "userId": user_id,
            "userName": user_name or DEFAULT_USER_NAME,
            "createdAt": timestamp_ms,
            "updatedAt": timestamp_ms,
        }
    return panels


def has_initial_panels(panels):
    return any(panel_id.startswith(INITIAL_PANEL_PREFIX) for panel_id in panels)


def classify_panel(panel, board_size=BOARD_SIZE):
    """Quadrant key for the panel's centre point."""
    board_width, board_height = board_size
    centre_x = panel["x"] + panel.get("width", 0) / 2
    centre_y = panel["y"] + panel.get("height", 0) / 2
    frequency = "frequent" if centre_y < board_height / 2 else "rare"
    impact = "large" if centre_x >= board_width / 2 else "small"
    return f"{frequency}_{impact}"


# --- Stores ---

class FirebaseBoardStore:
    """Board data in the Realtime Database, through firebase_admin.db references."""

    def __init__(self, root_ref, session_id):
        self.session_id = session_id
        self.ref = root_ref.child("work").child(session_id)

    @property
    def panels_ref(self):
        return self.ref.child("panels")

    @property
    def users_ref(self):
        return self.ref.child("users")

    def load_panels(self):
        return self.panels_ref.get() or {}

    def set_panel(self, panel_id, data):
        self.panels_ref.child(panel_id).set(data)

    def push_panel(self, data):
        return self.panels_ref.push(data).key

    def update_panel(self, panel_id, fields):
        # a plain update on a deleted path would recreate it without text
        def apply(current):
            if current is None:
                return None
            return {**current, **fields}

        if self.panels_ref.child(panel_id).transaction(apply) is None:
            raise PanelNotFoundError(panel_id)

    def delete_panel(self, panel_id):
        self.panels_ref.child(panel_id).delete()

    def clear_panels(self):
        self.panels_ref.delete()

    def load_users(self):
        return self.users_ref.get() or {}

    def set_user(self, user_id, data):
        self.users_ref.child(user_id).set(data)

    def update_user(self, user_id, fields):
        self.users_ref.child(user_id).update(fields)

    def delete_user(self, user_id):
        self.users_ref.child(user_id).delete()


class LocalBoardStore:
    """Offline store: one JSON file per session."""

    def __init__(self, session_id, data_dir=None):
        self.session_id = session_id
        self.path = os.path.join(data_dir or DATA_DIR, f"board_{session_id}.json")

    def _load(self):
        if os.path.exists(self.path):
            with open(self.path, "r", encoding="utf-8") as f:
                try:
                    data = json.load(f)
                except json.JSONDecodeError:
                    logger.warning("Board file %s is not valid JSON, starting empty", self.path)
                    return {"panels": {}, "users": {}}
            data.setdefault("panels", {})
            data.setdefault("users", {})
            return data
        return {"panels": {}, "users": {}}

    def _save(self, data):
        os.makedirs(os.path.dirname(self.path), exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    def load_panels(self):
        return self._load()["panels"]

    def set_panel(self, panel_id, data):
        board = self._load()
        board["panels"][panel_id] = data
        self._save(board)

    def push_panel(self, data):
        panel_id = generate_id("panel", data.get("createdAt"))
        self.set_panel(panel_id, data)
        return panel_id

    def update_panel(self, panel_id, fields):
        board = self._load()
        if panel_id not in board["panels"]:
            raise PanelNotFoundError(panel_id)
        board["panels"][panel_id].update(fields)
        self._save(board)

    def delete_panel(self, panel_id):
        board = self._load()
        board["panels"].pop(panel_id, None)
        self._save(board)

    def clear_panels(self):
        board = self._load()
        board["panels"] = {}
        self._save(board)

    def load_users(self):
        return self._load()["users"]

    def set_user(self, user_id, data):
        board = self._load()
        board["users"][user_id] = data
        self._save(board)

    def update_user(self, user_id, fields):
        board = self._load()
        board["users"].setdefault(user_id, {}).update(fields)
        self._save(board)

    def delete_user(self, user_id):
        board = self._load()
        board["users"].pop(user_id, None)
        self._save(board)


# --- Throttle ---

class WriteThrottle:
    """At most one write per key per interval; later writes wait as pending."""

    def __init__(self, write, interval=THROTTLE_SECONDS, clock=time.time):
        self.write = write
        self.interval = interval
        self.clock = clock
        self.pending = {}
        self._last_sent = {}

    def submit(self, key, fields):
        now = self.clock()
        last = self._last_sent.get(key)
        if last is None or now - last >= self.interval:
            merged = {**self.pending.pop(key, {}), **fields}
            self._send(key, merged, now)
        else:
            self.pending.setdefault(key, {}).update(fields)

    def poll(self):
        """Send pending writes whose interval has elapsed."""
        now = self.clock()
        for key in list(self.pending):
            if now - self._last_sent.get(key, 0) >= self.interval:
                self._send_pending(key, now)

    def flush(self, key=None):
        keys = [key] if key is not None else list(self.pending)
        now = self.clock()
        for k in keys:
            if k in self.pending:
                self._send_pending(k, now)

    def discard(self, key):
        self.pending.pop(key, None)
        self._last_sent.pop(key, None)

    def _send(self, key, fields, now):
        self._last_sent[key] = now
        self.write(key, fields)

    def _send_pending(self, key, now):
        try:
            self._send(key, self.pending.pop(key), now)
        except PanelNotFoundError:
            logger.warning("Dropped pending write for deleted panel %s", key)
            self._last_sent.pop(key, None)


# --- Board service ---

class PanelBoard:
    def __init__(self, store, user_id, user_name=DEFAULT_USER_NAME, clock=time.time,
                 throttle_interval=THROTTLE_SECONDS):
        self.store = store
        self.user_id = user_id
        self.user_name = user_name or DEFAULT_USER_NAME
        self.clock = clock
        self.panels = {}
        self.initial_loaded = False
        self._last_heartbeat = None
        self.throttle = WriteThrottle(store.update_panel, throttle_interval, clock)

    @property
    def session_id(self):
        return self.store.session_id

    def _now(self):
        return now_ms(self.clock)

    def _get(self, panel_id):
        if panel_id not in self.panels:
            raise PanelNotFoundError(panel_id)
        return self.panels[panel_id]

    # --- panels ---

    def sync(self):
        """Pull remote panels, keeping local geometry that has not been written yet."""
        remote = {panel_id: data for panel_id, data in self.store.load_panels().items()
                  if isinstance(data, dict) and "text" in data}
        for panel_id in list(self.throttle.pending):
            if panel_id in remote:
                remote[panel_id] = {**remote[panel_id], **self.throttle.pending[panel_id]}
            else:
                self.throttle.discard(panel_id)
        self.panels = remote
        if not has_initial_panels(self.panels) and not self.initial_loaded:
            self.seed_initial_panels()
        self.initial_loaded = True
        return self.list_panels()

    def seed_initial_panels(self):
        seeded = initial_panels(self.user_id, self.user_name, self._now())
        for panel_id, data in seeded.items():
            self.store.set_panel(panel_id, data)
        self.panels.update(seeded)
        self.initial_loaded = True
        logger.info("Seeded %d initial panels in %s", len(seeded), self.session_id)
        return seeded

    def list_panels(self):
        return [{"id": panel_id, **data} for panel_id, data in
                sorted(self.panels.items(), key=lambda item: item[1].get("createdAt", 0))]

    def add_panel(self, text=NEW_PANEL_TEXT):
        timestamp = self._now()
        data = {
            "text": text,
            **NEW_PANEL_GEOMETRY,
            "userId": self.user_id,
            "userName": self.user_name,
            "createdAt": timestamp,
            "updatedAt": timestamp,
        }
        panel_id = self.store.push_panel(data)
        self.panels[panel_id] = data
        logger.info("Added panel %s to %s", panel_id, self.session_id)
        return panel_id

    def move_panel(self, panel_id, x, y):
        panel = self._get(panel_id)
        panel["x"] = max(0, x)
        panel["y"] = max(0, y)
        panel["updatedAt"] = self._now()
        self.throttle.submit(panel_id, {"x": panel["x"], "y": panel["y"], "updatedAt": panel["updatedAt"]})
        return panel

    def resize_panel(self, panel_id, width):
        panel = self._get(panel_id)
        panel["width"] = max(RESIZE_MIN_WIDTH, width)
        panel["updatedAt"] = self._now()
        self.throttle.submit(panel_id, {"width": panel["width"], "updatedAt": panel["updatedAt"]})
        return panel

    def end_interaction(self, panel_id=None):
        self.throttle.flush(panel_id)

    def edit_text(self, panel_id, text):
        panel = self._get(panel_id)
        panel["text"] = text
        panel["updatedAt"] = self._now()
        self.store.update_panel(panel_id, {"text": text, "updatedAt": panel["updatedAt"]})
        return panel

    def delete_panel(self, panel_id):
        self._get(panel_id)
        self.throttle.discard(panel_id)
        del self.panels[panel_id]
        self.store.delete_panel(panel_id)
        logger.info("Deleted panel %s from %s", panel_id, self.session_id)

    def reset(self):
        self.throttle.pending.clear()
        self.store.clear_panels()
        self.panels = {}
        logger.info("Reset board %s", self.session_id)
        return self.seed_initial_panels()

    def quadrant_summary(self, board_size=BOARD_SIZE):
        summary = {key: [] for key in QUADRANTS}
        for panel in self.list_panels():
            summary[classify_panel(panel, board_size)].append(panel["text"])
        return summary

    # --- presence ---

    def join(self):
        self._last_heartbeat = self.clock()
        self.store.set_user(self.user_id, {"userName": self.user_name, "lastSeen": self._now()})
        logger.info("User %s joined %s", self.user_id, self.session_id)

    def heartbeat(self, force=False):
        """Refresh lastSeen if the heartbeat interval has passed. Returns True when written."""
        now = self.clock()
        if not force and self._last_heartbeat is not None and now - self._last_heartbeat < HEARTBEAT_SECONDS:
            return False
        self._last_heartbeat = now
        self.store.update_user(self.user_id, {"lastSeen": self._now()})
        return True

    def leave(self):
        self.throttle.flush()
        self.store.delete_user(self.user_id)
        logger.info("User %s left %s", self.user_id, self.session_id)

    def rename(self, user_name):
        self.user_name = user_name or DEFAULT_USER_NAME
        self.store.update_user(self.user_id, {"userName": self.user_name, "lastSeen": self._now()})

    def active_users(self):
        cutoff = self._now() - ACTIVE_USER_SECONDS * 1000
        users = self.store.load_users()
        return [{"userId": user_id, **data} for user_id, data in users.items()
                if data.get("lastSeen", 0) > cutoff]
