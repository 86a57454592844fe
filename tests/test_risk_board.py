import copy
import re

import pytest

from risk_board import (
    FirebaseBoardStore,
    LocalBoardStore,
    PanelBoard,
    PanelNotFoundError,
    WriteThrottle,
    calculate_panel_width,
    classify_panel,
    generate_id,
    initial_panels,
)


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


class FakeDatabase:
    def __init__(self):
        self.data = {}
        self.pushed = 0


class FakeReference:
    """In-memory stand-in for firebase_admin.db.Reference."""

    def __init__(self, database=None, path=()):
        self.database = database or FakeDatabase()
        self.path = path

    @property
    def key(self):
        return self.path[-1] if self.path else None

    def child(self, name):
        return FakeReference(self.database, self.path + tuple(name.split("/")))

    def _node(self, create=False):
        node = self.database.data
        for part in self.path:
            if part not in node:
                if not create:
                    return None
                node[part] = {}
            node = node[part]
        return node

    def get(self):
        node = self._node()
        return copy.deepcopy(node) if node else None

    def set(self, value):
        parent = FakeReference(self.database, self.path[:-1])._node(create=True)
        parent[self.path[-1]] = copy.deepcopy(value)

    def update(self, value):
        self._node(create=True).update(copy.deepcopy(value))

    def delete(self):
        parent = FakeReference(self.database, self.path[:-1])._node()
        if parent is not None:
            parent.pop(self.path[-1], None)

    def transaction(self, transaction_update):
        new_value = transaction_update(self.get())
        if new_value is None:
            self.delete()
        else:
            self.set(new_value)
        return new_value

    def push(self, value):
        self.database.pushed += 1
        ref = self.child(f"-Npush{self.database.pushed:04d}")
        ref.set(value)
        return ref


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def root():
    return FakeReference()


@pytest.fixture
def board(root, clock):
    store = FirebaseBoardStore(root, "session-1")
    return PanelBoard(store, "user-1", "Alice", clock=clock)


def remote_panels(root):
    return root.child("work/session-1/panels").get() or {}


def test_generate_id_format():
    assert re.fullmatch(r"session-1700000000000-[0-9a-z]{9}", generate_id("session", 1700000000000))


def test_panel_width_is_clamped():
    assert calculate_panel_width("骨折") == 60
    assert calculate_panel_width("あいうえお") == 5 * 16.5 + 16
    assert calculate_panel_width("あ" * 20) == 250


def test_initial_panels_layout():
    panels = initial_panels("user-1", "Alice", 1000)
    assert len(panels) == 13
    third = panels["initial-panel-1000-2"]
    assert (third["x"], third["y"], third["height"]) == (20, 104, 40)
    assert third["userName"] == "Alice"


def test_classify_panel():
    assert classify_panel({"x": 0, "y": 0, "width": 200, "height": 40}) == "frequent_small"
    assert classify_panel({"x": 800, "y": 600, "width": 100, "height": 40}) == "rare_large"
    assert classify_panel({"x": 450, "y": 100, "width": 100, "height": 40}) == "frequent_large"


def test_sync_seeds_initial_panels_once(board, root):
    panels = board.sync()
    assert len(panels) == 13
    assert len(remote_panels(root)) == 13

    board.sync()
    assert len(remote_panels(root)) == 13


def test_add_panel_uses_push_key(board, root):
    board.sync()
    panel_id = board.add_panel()
    assert panel_id.startswith("-Npush")
    stored = remote_panels(root)[panel_id]
    assert (stored["x"], stored["y"], stored["width"]) == (400, 300, 200)
    assert stored["text"] == "新しいリスク"
    assert board.list_panels()[-1]["id"] == panel_id


def test_move_is_throttled_and_flushed(board, root, clock):
    board.sync()
    panel_id = board.add_panel()

    board.move_panel(panel_id, 100, 50)
    assert remote_panels(root)[panel_id]["x"] == 100

    clock.now += 0.05
    board.move_panel(panel_id, 120, 60)
    assert remote_panels(root)[panel_id]["x"] == 100
    # local state wins over the remote copy until the write goes out
    synced = {panel["id"]: panel for panel in board.sync()}
    assert synced[panel_id]["x"] == 120

    board.end_interaction(panel_id)
    assert remote_panels(root)[panel_id]["x"] == 120
    assert board.throttle.pending == {}


def test_move_and_resize_limits(board):
    board.sync()
    panel_id = board.add_panel()
    panel = board.move_panel(panel_id, -10, -5)
    assert (panel["x"], panel["y"]) == (0, 0)
    assert board.resize_panel(panel_id, 40)["width"] == 100


def test_edit_text_writes_immediately(board, root):
    board.sync()
    panel_id = board.add_panel()
    board.edit_text(panel_id, "地震")
    assert remote_panels(root)[panel_id]["text"] == "地震"


def test_delete_panel(board, root, clock):
    board.sync()
    panel_id = board.add_panel()
    board.move_panel(panel_id, 10, 10)
    clock.now += 0.01
    board.move_panel(panel_id, 20, 20)

    board.delete_panel(panel_id)
    assert panel_id not in remote_panels(root)
    assert panel_id not in board.throttle.pending

    with pytest.raises(PanelNotFoundError):
        board.delete_panel(panel_id)
    with pytest.raises(KeyError):
        board.move_panel("missing", 0, 0)


def test_reset_reseeds(board, root, clock):
    board.sync()
    panel_id = board.add_panel()
    clock.now += 10
    board.reset()
    panels = remote_panels(root)
    assert panel_id not in panels
    assert len(panels) == 13
    assert all(key.startswith("initial-panel-1010000-") for key in panels)


def test_quadrant_summary_for_initial_layout(board):
    board.sync()
    summary = board.quadrant_summary()
    assert len(summary["frequent_small"]) == 8
    assert len(summary["rare_small"]) == 5
    assert summary["frequent_large"] == [] and summary["rare_large"] == []


def test_presence_heartbeat_and_expiry(board, root, clock):
    board.join()
    assert root.child("work/session-1/users/user-1").get() == {"userName": "Alice", "lastSeen": 1000000}
    assert not board.heartbeat()

    clock.now += 31
    assert board.heartbeat()
    assert root.child("work/session-1/users/user-1/lastSeen").get() == 1031000
    assert [user["userId"] for user in board.active_users()] == ["user-1"]

    clock.now += 301
    assert board.active_users() == []


def test_rename_and_leave(board, root, clock):
    board.join()
    board.rename("Bob")
    assert root.child("work/session-1/users/user-1/userName").get() == "Bob"

    board.sync()
    panel_id = board.add_panel()
    board.move_panel(panel_id, 10, 10)
    clock.now += 0.01
    board.move_panel(panel_id, 30, 30)
    board.leave()
    assert remote_panels(root)[panel_id]["x"] == 30
    assert root.child("work/session-1/users/user-1").get() is None


def test_write_throttle_poll(clock):
    writes = []
    throttle = WriteThrottle(lambda key, fields: writes.append((key, fields)), 0.1, clock)
    throttle.submit("p", {"x": 1})
    clock.now += 0.02
    throttle.submit("p", {"x": 2})
    throttle.submit("p", {"y": 3})
    throttle.poll()
    assert writes == [("p", {"x": 1})]

    clock.now += 0.1
    throttle.poll()
    assert writes == [("p", {"x": 1}), ("p", {"x": 2, "y": 3})]


def test_local_store_board(tmp_path, clock):
    store = LocalBoardStore("session-1", tmp_path)
    board = PanelBoard(store, "user-1", "Alice", clock=clock)
    assert len(board.sync()) == 13

    panel_id = board.add_panel("地震")
    assert panel_id.startswith("panel-1000000-")
    board.edit_text(panel_id, "台風")

    reopened = LocalBoardStore("session-1", tmp_path)
    assert reopened.load_panels()[panel_id]["text"] == "台風"
    with pytest.raises(PanelNotFoundError):
        reopened.update_panel("missing", {"x": 1})

    board.join()
    assert "user-1" in reopened.load_users()


def test_local_store_tolerates_corrupt_file(tmp_path):
    store = LocalBoardStore("session-1", tmp_path)
    with open(store.path, "w", encoding="utf-8") as f:
        f.write("{")
    assert store.load_panels() == {}
    assert store.load_users() == {}


@pytest.fixture
def other_board(root, clock):
    return PanelBoard(FirebaseBoardStore(root, "session-1"), "user-2", "Bob", clock=clock)


def test_moving_a_panel_deleted_elsewhere_leaves_no_partial_panel(board, other_board, root):
    board.sync()
    panel_id = board.add_panel()
    other_board.sync()
    other_board.delete_panel(panel_id)

    with pytest.raises(PanelNotFoundError):
        board.move_panel(panel_id, 50, 50)
    board.end_interaction(panel_id)

    assert panel_id not in remote_panels(root)
    assert panel_id not in {panel["id"] for panel in board.sync()}
    assert len(board.quadrant_summary()["frequent_small"]) == 8


def test_pending_write_for_deleted_panel_is_dropped(board, other_board, root, clock):
    board.sync()
    panel_id = board.add_panel()
    board.move_panel(panel_id, 10, 10)
    clock.now += 0.01
    board.move_panel(panel_id, 60, 60)

    other_board.sync()
    other_board.delete_panel(panel_id)

    board.end_interaction(panel_id)
    assert panel_id not in remote_panels(root)
    assert board.throttle.pending == {}


def test_sync_skips_panels_without_text(board, root):
    board.sync()
    root.child("work/session-1/panels/ghost").set({"x": 50, "y": 50, "updatedAt": 1})
    panels = board.sync()
    assert "ghost" not in {panel["id"] for panel in panels}
    board.quadrant_summary()


def test_sync_forgets_pending_writes_for_vanished_panels(board, other_board, clock):
    board.sync()
    panel_id = board.add_panel()
    board.move_panel(panel_id, 10, 10)
    clock.now += 0.01
    board.move_panel(panel_id, 60, 60)

    other_board.sync()
    other_board.delete_panel(panel_id)
    board.sync()
    assert panel_id not in board.throttle.pending


def test_poll_keeps_going_after_a_deleted_panel(tmp_path, clock):
    store = LocalBoardStore("session-1", tmp_path)
    store.set_panel("a", {"text": "a", "x": 0, "y": 0})
    store.set_panel("b", {"text": "b", "x": 0, "y": 0})
    throttle = WriteThrottle(store.update_panel, 0.1, clock)
    throttle.submit("a", {"x": 1})
    throttle.submit("b", {"x": 1})
    throttle.submit("a", {"x": 2})
    throttle.submit("b", {"x": 2})

    store.delete_panel("a")
    clock.now += 0.2
    throttle.poll()

    assert throttle.pending == {}
    assert store.load_panels()["b"]["x"] == 2
    assert "a" not in store.load_panels()
