"""Tests for utils.progress_visualiser."""

import threading

import pytest
from tqdm.auto import tqdm

from treeart.errors import InvalidParentError, UnknownItemError
from treeart.tree import Node
from utils.progress_visualiser import ProgressBar, ProgressFactory, ProgressType, TreeProgressManager


@pytest.fixture
def restore_factory_type():
    saved = ProgressFactory.get_progress_type()
    yield
    ProgressFactory.set_progress_type(saved)


@pytest.fixture
def manager():
    with TreeProgressManager(progress_type=ProgressType.NONE) as m:
        yield m


class TestProgressBar:
    def test_full_description(self):
        bar = ProgressBar("task", 10, prefix=" ├─ ", progress_type=ProgressType.NONE)
        assert bar.full_description == " ├─ task"
        bar.set_prefix(" └─ ")
        assert bar.full_description == " └─ task"

    def test_update_is_capped_at_total(self):
        bar = ProgressBar("task", 2, progress_type=ProgressType.NONE)
        bar.update(5)
        assert bar.current == 2

    def test_simple_prints_percentage(self, capsys):
        bar = ProgressBar("task", 4, prefix="> ", progress_type=ProgressType.SIMPLE)
        bar.update()
        bar.close()
        assert capsys.readouterr().out == "\r> task: 25.0%\n"


class TestProgressFactory:
    def test_default_type(self, restore_factory_type):
        ProgressFactory.set_progress_type(ProgressType.NONE)
        bar = ProgressFactory.create_bar("x", 1)
        assert bar.progress_type is ProgressType.NONE

    def test_invalid_type_falls_back_to_tqdm(self, restore_factory_type):
        ProgressFactory.set_progress_type("fancy")
        assert ProgressFactory.get_progress_type() is ProgressType.TQDM


class TestTreeProgressManager:
    def test_root_row_has_no_prefix(self, manager):
        manager.add_bar("root")
        assert manager.render() == "root"

    def test_sibling_reprefixes_earlier_rows(self, manager):
        root = manager.add_bar("root")
        a = manager.add_bar("a", parent=root)
        assert manager.rows()[1] == (a, " └─ a")

        b = manager.add_bar("b", parent=root)
        assert manager.rows() == [(root, "root"), (a, " ├─ a"), (b, " └─ b")]

    def test_child_row_lands_under_its_parent(self, manager):
        root = manager.add_bar("root")
        a = manager.add_bar("a", parent=root)
        manager.add_bar("b", parent=root)
        aa = manager.add_bar("aa", parent=a)

        assert manager.position_of(aa) == 2
        assert manager.render().splitlines() == [
            "root",
            " ├─ a",
            " │  └─ aa",
            " └─ b",
        ]

    def test_prefix_of_has_no_trailing_space(self, manager):
        root = manager.add_bar("root")
        child = manager.add_bar("child", parent=root)
        assert manager.prefix_of(root) is None
        assert manager.prefix_of(child) == " └─"

    def test_set_message_keeps_prefix(self, manager):
        root = manager.add_bar("root")
        a = manager.add_bar("a", parent=root)
        manager.set_message(a, "renamed")
        assert manager.rows()[1] == (a, " └─ renamed")
        assert manager.materialize() == Node("root", (Node("a"),))

    def test_unknown_bar(self, manager):
        with pytest.raises(UnknownItemError):
            manager.update(42)
        with pytest.raises(UnknownItemError):
            manager.set_message(42, "x")

    def test_unknown_parent_becomes_root_row(self, manager):
        manager.add_bar("root")
        orphan = manager.add_bar("orphan", parent=99)
        assert manager.rows()[-1] == (orphan, "orphan")

    def test_strict_rejects_unknown_parent(self):
        strict = TreeProgressManager(progress_type=ProgressType.NONE, strict=True)
        with pytest.raises(InvalidParentError):
            strict.add_bar("orphan", parent=99)
        assert strict.rows() == []

    def test_concurrent_adds(self, manager):
        root = manager.add_bar("root")

        def worker(n):
            manager.add_bar(f"task {n}", parent=root)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        texts = [text for _, text in manager.rows()]
        assert len(texts) == 9
        assert all(text.startswith(" ├─ task") for text in texts[1:-1])
        assert texts[-1].startswith(" └─ task")

    def test_simple_progress_output(self, capsys):
        with TreeProgressManager(progress_type=ProgressType.SIMPLE) as m:
            root = m.add_bar("root")
            task = m.add_bar("task", total=4, parent=root)
            m.update(task)
        assert "\r └─ task: 25.0%" in capsys.readouterr().out

    def test_tqdm_bars_follow_their_rows(self):
        with TreeProgressManager(style="ascii", progress_type=ProgressType.TQDM) as m:
            root = m.add_bar("r", total=3)
            a = m.add_bar("a", parent=root)
            m.add_bar("b", parent=root)
            t = m.add_bar("t", parent=root)
            m.update(root)

            a_bar = m._bars[a].bar
            t_bar = m._bars[t].bar
            assert a_bar.desc.startswith(" +- a")
            assert t_bar.pos == -3
            assert m._bars[root].bar.n == 1

    def test_tqdm_rows_move_down_when_inserted_above(self):
        with TreeProgressManager(progress_type=ProgressType.TQDM) as m:
            root = m.add_bar("r")
            a = m.add_bar("a", parent=root)
            b = m.add_bar("b", parent=root)
            m.add_bar("aa", parent=a)
            assert m._bars[b].bar.pos == -3


class TestTqdmBars:
    def test_indeterminate_bar_can_be_reprefixed_and_closed(self):
        bar = ProgressBar("scan", None, prefix=" ├─ ", progress_type=ProgressType.TQDM)
        bar.update()
        bar.set_prefix(" └─ ")
        bar.set_description("scanned")
        assert bar.bar.n == 1
        assert bar.bar.desc.startswith(" └─ scanned")
        bar.close()
        assert bar.bar.disable
        assert bar.bar not in tqdm._instances

    def test_zero_total_bar_is_still_managed(self):
        bar = ProgressBar("empty", 0, progress_type=ProgressType.TQDM)
        bar.set_prefix("> ")
        assert bar.bar.desc.startswith("> empty")
        bar.close()
        assert bar.bar not in tqdm._instances

    def test_default_manager_with_indeterminate_totals(self, restore_factory_type):
        ProgressFactory.set_progress_type(ProgressType.TQDM)
        with TreeProgressManager() as m:
            root = m.add_bar("root")
            a = m.add_bar("a", parent=root)
            b = m.add_bar("b", parent=root)
            m.add_bar("empty", total=0, parent=a)
            m.update(b)
            bars = [m._bars[item_id].bar for item_id, _ in m.rows()]
            assert m.render().splitlines() == ["root", " ├─ a", " │  └─ empty", " └─ b"]
            assert m._bars[b].bar.pos == -3
        assert all(bar not in tqdm._instances for bar in bars)
