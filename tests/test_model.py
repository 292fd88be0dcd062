import pytest

from animator.errors import InvalidIndexError, InvalidPixelPositionError, LastFrameError
from animator.model import (
    AnimationSequence, FrameStore, HIDDEN_FRAME_INDEX, HIDDEN_FRAME_INSERTED,
    HIDDEN_FRAME_REMOVED, PIXEL_COUNT, PixelBuffer, SequenceModel,
    pixel_coords, pixel_position, remap_index_after_delete,
)


def assert_placeholder_consistent(model: SequenceModel):
    real_count = model.get_real_frame_count()
    if real_count == 1:
        assert model.has_hidden_frame()
        assert HIDDEN_FRAME_INDEX in model.sequence
        assert model.get_frame(HIDDEN_FRAME_INDEX).is_blank()
    else:
        assert not model.has_hidden_frame()
        assert sorted(model.sequence.to_list()) == list(range(model.get_frame_count()))


# --- PixelBuffer ---

def test_pixel_buffer_starts_white_with_256_pixels():
    buffer = PixelBuffer()
    assert len(buffer) == PIXEL_COUNT
    assert buffer.is_blank()
    assert set(buffer.get_all_colors()) == {"#ffffff"}


def test_pixel_buffer_rejects_wrong_length_colors():
    assert PixelBuffer(["#000000"] * 10).is_blank()


def test_pixel_buffer_copies_and_normalizes_input():
    colors = ["#ABC"] * PIXEL_COUNT
    buffer = PixelBuffer(colors)
    colors[0] = "#000000"
    assert buffer.get_pixel_color(0) == "#aabbcc"


def test_pixel_buffer_set_and_get():
    buffer = PixelBuffer()
    buffer.set_pixel_color(17, "#F00")
    assert buffer.get_pixel_color(17) == "#ff0000"
    assert not buffer.is_blank()


@pytest.mark.parametrize("position", [-1, 256, 1000, "3", 2.0, True])
def test_pixel_buffer_invalid_positions(position):
    buffer = PixelBuffer()
    with pytest.raises(InvalidPixelPositionError):
        buffer.set_pixel_color(position, "#000000")


def test_pixel_buffer_invalid_color_leaves_pixel_unchanged():
    buffer = PixelBuffer()
    with pytest.raises(ValueError):
        buffer.set_pixel_color(5, "not-a-color")
    assert buffer.get_pixel_color(5) == "#ffffff"


def test_pixel_coords_row_major():
    assert pixel_coords(0) == (0, 0)
    assert pixel_coords(17) == (1, 1)
    assert pixel_coords(255) == (15, 15)
    assert pixel_position(15, 15) == 255


def test_remap_index_after_delete():
    assert remap_index_after_delete(0, 2) == 0
    assert remap_index_after_delete(2, 2) is None
    assert remap_index_after_delete(5, 2) == 4


# --- FrameStore ---

def test_frame_store_initialize_creates_frame_and_placeholder():
    store = FrameStore()
    store.initialize()
    assert store.frame_count() == 2
    assert store.real_frame_count() == 1
    assert store.hidden_frame_exists
    assert store.is_hidden_index(1)


def test_frame_store_rejects_deleting_last_real_frame():
    store = FrameStore()
    store.initialize()
    for index in (0, 1, 7):
        with pytest.raises(LastFrameError):
            store.delete_frame(index)
    assert store.frame_count() == 2


def test_frame_store_reconcile_removes_then_restores_placeholder():
    store = FrameStore()
    store.initialize()
    assert store.add_frame() == 2
    assert store.reconcile_hidden_frame() == (HIDDEN_FRAME_REMOVED, HIDDEN_FRAME_INDEX)
    assert store.frame_count() == 2
    assert store.reconcile_hidden_frame() is None
    store.delete_frame(1)
    assert store.reconcile_hidden_frame() == (HIDDEN_FRAME_INSERTED, HIDDEN_FRAME_INDEX)
    assert store.frame_count() == 2 and store.hidden_frame_exists


def test_frame_store_get_and_paint_bounds():
    store = FrameStore()
    store.initialize()
    with pytest.raises(InvalidIndexError):
        store.get_frame(2)
    with pytest.raises(InvalidIndexError):
        store.paint_pixel(-1, 0, "#000000")
    with pytest.raises(InvalidIndexError):
        store.paint_pixel(HIDDEN_FRAME_INDEX, 0, "#000000")
    with pytest.raises(InvalidPixelPositionError):
        store.paint_pixel(0, 256, "#000000")
    store.paint_pixel(0, 255, "#123456")
    assert store.get_frame(0).get_pixel_color(255) == "#123456"


# --- AnimationSequence ---

def test_sequence_reset_and_entries_are_restartable():
    sequence = AnimationSequence()
    sequence.reset()
    assert sequence.to_list() == [0, 1]
    entries = sequence.entries()
    assert next(entries) == 0
    assert list(sequence.entries()) == [0, 1]
    assert list(sequence) == [0, 1]


def test_sequence_delete_removes_and_shifts():
    sequence = AnimationSequence()
    for index in (3, 0, 2, 1):
        sequence.on_frame_added(index)
    sequence.on_frame_deleted(1)
    assert sequence.to_list() == [2, 0, 1]


def test_sequence_hidden_insert_shifts_and_sorts():
    sequence = AnimationSequence()
    sequence.on_frame_added(0)
    sequence.on_hidden_frame_inserted(HIDDEN_FRAME_INDEX)
    assert sequence.to_list() == [0, 1]


def test_sequence_position_out_of_range():
    sequence = AnimationSequence()
    sequence.reset()
    with pytest.raises(InvalidIndexError):
        sequence[2]


# --- SequenceModel ---

def test_initialize_state(model):
    assert model.get_frame_count() == 2
    assert model.sequence.to_list() == [0, 1]
    assert model.get_current_edit_frame_index() == 0
    assert model.thumbnail_indices() == [0]
    assert_placeholder_consistent(model)


def test_two_adds_drop_placeholder(model):
    assert model.add_frame() == 1
    assert model.add_frame() == 2
    assert model.get_frame_count() == 3
    assert not model.has_hidden_frame()
    assert model.sequence.to_list() == [0, 1, 2]
    assert model.thumbnail_indices() == [0, 1, 2]
    assert model.get_current_edit_frame_index() == 2


def test_delete_single_real_frame_fails_and_changes_nothing(model):
    model.paint_pixel(0, 3, "#ff0000")
    before = [f.get_all_colors() for f in model.frame_store.frames]
    with pytest.raises(LastFrameError):
        model.delete_frame(1)
    with pytest.raises(LastFrameError):
        model.delete_frame(0)
    assert [f.get_all_colors() for f in model.frame_store.frames] == before
    assert model.sequence.to_list() == [0, 1]


def test_add_then_delete_round_trip(model):
    model.paint_pixel(0, 10, "#00ff00")
    store_before = [PixelBuffer(f.get_all_colors()) for f in model.frame_store.frames]
    sequence_before = model.sequence.to_list()
    new_index = model.add_frame()
    model.paint_pixel(new_index, 0, "#0000ff")
    model.delete_frame(new_index)
    assert model.frame_store.frames == store_before
    assert model.sequence.to_list() == sequence_before == [0, 1]
    assert model.has_hidden_frame()
    assert model.get_current_edit_frame_index() == 0


def test_delete_remaps_sequence_and_visible_index(model):
    for _ in range(3):
        model.add_frame()
    for index in range(4):
        model.paint_pixel(index, 0, f"#0000{index:02x}")
    model.set_current_edit_frame_index(3)
    model.delete_frame(1)
    assert model.sequence.to_list() == [0, 1, 2]
    assert model.get_current_edit_frame_index() == 2
    assert [model.get_frame(i).get_pixel_color(0) for i in range(3)] == ["#000000", "#000002", "#000003"]


def test_deleting_visible_frame_falls_back_to_first(model):
    model.add_frame()
    model.add_frame()
    assert model.get_current_edit_frame_index() == 2
    assert model.delete_frame(2) == 0


def test_deleting_first_of_two_keeps_other_frame(model):
    model.add_frame()
    model.paint_pixel(1, 0, "#abcdef")
    model.delete_frame(0)
    assert model.get_frame_count() == 2
    assert model.get_frame(0).get_pixel_color(0) == "#abcdef"
    assert model.sequence.to_list() == [0, 1]
    assert_placeholder_consistent(model)


def test_placeholder_consistent_through_mixed_edits(model):
    operations = ["add", "add", ("delete", 0), "add", ("delete", 2), ("delete", 1), "add", ("delete", 0)]
    for op in operations:
        if op == "add":
            model.add_frame()
        else:
            model.delete_frame(op[1])
        assert_placeholder_consistent(model)
        assert 0 <= model.get_current_edit_frame_index() < model.get_frame_count()
        assert not model.is_hidden_index(model.get_current_edit_frame_index())


def test_paint_changes_only_target_frame(model, record):
    model.add_frame()
    model.add_frame()
    updates = record(model.frame_content_updated)
    others_before = [model.get_frame_colors(i) for i in (0, 2)]
    assert model.paint_pixel(1, 42, "#112233") is True
    assert model.get_frame(1).get_pixel_color(42) == "#112233"
    assert [model.get_frame_colors(i) for i in (0, 2)] == others_before
    assert updates.calls == [(1,)]
    assert model.paint_pixel(1, 42, "#112233") is False
    assert updates.calls == [(1,)]


def test_hidden_frame_is_not_navigable(model):
    with pytest.raises(InvalidIndexError):
        model.set_current_edit_frame_index(HIDDEN_FRAME_INDEX)
    with pytest.raises(InvalidIndexError):
        model.set_current_edit_frame_index(5)
    assert model.get_current_edit_frame_index() == 0


def test_structural_signals(model, record):
    changed = record(model.frames_changed)
    edit_changed = record(model.current_edit_frame_changed)
    model.add_frame()
    assert len(changed.calls) == 1
    assert edit_changed.calls == [(1,)]
