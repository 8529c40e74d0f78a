import pytest

from algorithms.frames import FrameEvent
from engine import Recorder, Stepper, StepperState, UnknownAlgorithmError, compare
from engine.stepper import SPEED_PRESETS


def _run(key, **inputs):
    rec = Recorder()
    rec.start(key, **inputs)
    rec.run_to_completion()
    return rec


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
def test_bubble_sort_metrics():
    rec = _run("bubble_sort", values=[5, 3, 8, 1])
    m = rec.get_metrics()
    assert m.algo_label == "Bubble Sort"
    assert m.category == "sorting"
    assert m.total_frames == len(rec.frames)
    assert m.comparisons == 6
    assert m.mutations == 4
    assert m.wall_time_ms >= 0
    assert m.memory_bytes > 0


def test_search_metrics_report_found_index():
    assert _run("linear_search", values=[4, 2, 7], target=7).metrics.found_index == 2
    assert _run("linear_search", values=[4, 2, 7], target=9).metrics.found_index is None


def test_dijkstra_metrics_carry_path_cost(diamond_graph):
    m = _run("dijkstra", graph=diamond_graph, start=0, end=3).metrics
    assert m.path == [0, 2, 1, 3]
    assert m.path_cost == 4
    assert m.visits > 0 and m.updates > 0


def test_traversal_metrics_have_no_cost(diamond_graph):
    m = _run("bfs", graph=diamond_graph, start=0).metrics
    assert sorted(m.path) == [0, 1, 2, 3]
    assert m.path_cost is None


def test_tree_metrics_count_distinct_keys():
    assert _run("bst", keys=[5, 3, 5, 9]).metrics.tree_size == 3


def test_unrelated_inputs_are_ignored():
    rec = _run("bubble_sort", values=[2, 1], target=1, keys=[3])
    assert set(rec.export()["inputs"]) == {"values"}


def test_unknown_algorithm():
    with pytest.raises(UnknownAlgorithmError):
        Recorder().start("bogo_sort", values=[1])


def test_run_requires_start():
    with pytest.raises(RuntimeError):
        Recorder().run_to_completion()


def test_run_loads_stepper():
    rec = _run("bubble_sort", values=[3, 1, 2])
    assert rec.stepper.total_frames == len(rec.frames)
    assert rec.stepper.current_idx == 0
    assert rec.stepper.current_frame.event is FrameEvent.START


def test_export_shape(diamond_graph):
    data = _run("dfs", graph=diamond_graph, start=0).export()
    assert data["algoKey"] == "dfs"
    assert data["inputs"]["graph"] == diamond_graph.to_dict()
    assert data["metrics"]["total_frames"] == len(data["frames"])
    assert data["frames"][0]["event"] == "start"


def test_compare_picks_lower_counts():
    values = [9, 8, 7, 6, 5, 4, 3, 2, 1]
    bubble = _run("bubble_sort", values=values)
    merge = _run("merge_sort", values=values)
    result = compare(bubble, merge)
    assert result.winner_comparisons == "Merge Sort"
    assert result.left.algo_key == "bubble_sort"
    assert set(result.to_dict()) >= {"left", "right", "winner_frames", "winner_time"}


def test_compare_tie():
    a = _run("bubble_sort", values=[1, 2, 3])
    b = _run("bubble_sort", values=[1, 2, 3])
    result = compare(a, b)
    assert result.winner_frames == "tie"
    assert result.winner_comparisons == "tie"


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------
@pytest.fixture
def frames():
    return _run("bubble_sort", values=[3, 1, 2]).frames


def test_stepper_starts_idle():
    s = Stepper()
    assert s.state is StepperState.IDLE
    assert s.current_frame is None
    s.play()
    assert s.state is StepperState.IDLE


def test_stepper_navigation(frames):
    seen = []
    s = Stepper(on_step=seen.append)
    s.load(frames)
    assert s.state is StepperState.PAUSED
    assert s.prev_step() is False

    assert s.next_step() is True
    assert s.current_idx == 1
    assert s.prev_step() is True
    assert s.current_idx == 0

    assert s.goto_step(len(frames) - 1)
    assert s.is_finished
    assert s.next_step() is False
    assert s.prev_step() is True
    assert s.state is StepperState.PAUSED

    assert s.goto_step(len(frames)) is False
    assert s.goto_step(-1) is False
    assert seen[0] is frames[0]


def test_stepper_rewind_and_jump(frames):
    s = Stepper()
    s.load(frames)
    s.jump_to_end()
    assert s.current_frame is frames[-1]
    assert s.is_finished
    s.rewind()
    assert s.current_idx == 0
    assert s.state is StepperState.PAUSED
    s.reset()
    assert s.state is StepperState.IDLE
    assert s.total_frames == 0


def test_single_frame_trace_is_finished_on_load(frames):
    s = Stepper()
    s.load(frames[:1])
    assert s.is_finished
    s.play()
    assert not s.is_playing


def test_stepper_tick_respects_speed(frames):
    s = Stepper()
    s.load(frames)
    s.set_speed("slow")
    s.play()
    start = s._last_tick
    assert s.tick(now=start + 0.5) is False
    assert s.tick(now=start + 1.0) is True
    assert s.current_idx == 1

    s.pause()
    assert s.tick(now=start + 10) is False
    s.toggle_play()
    assert s.is_playing
    s.toggle_play()
    assert s.state is StepperState.PAUSED


def test_tick_plays_to_the_end(frames):
    s = Stepper()
    s.load(frames)
    s.set_speed_value(0)
    assert s.speed == 0.02
    s.play()
    now = s._last_tick
    while s.is_playing:
        now += 1
        s.tick(now=now)
    assert s.is_finished
    assert s.current_idx == len(frames) - 1


def test_speed_presets():
    s = Stepper()
    s.set_speed("turbo")
    assert s.speed == SPEED_PRESETS["turbo"]
    s.set_speed("warp")
    assert s.speed == SPEED_PRESETS["medium"]
