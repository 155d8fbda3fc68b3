from __future__ import annotations

from src.data.filters import ALL, FilterState
from src.data.pipeline import NO_DATA_MESSAGE, NO_MATCH_MESSAGE, build_view


def test_stock_view_renders_all_columns(stock_grid):
    view = build_view(stock_grid, "stock")
    assert view.visible_columns is None
    assert view.columns == [0, 1, 2, 3]
    assert len(view.header_rows) == 1
    assert view.total_rows == 4


def test_stock_search_and_type(stock_grid):
    view = build_view(stock_grid, "stock", FilterState(type="Valve", search="spare"))
    assert view.body[0].tolist() == ["Spare valve"]


def test_equipment_reorders_before_filtering():
    grid = [
        ["Cabinet", "Area", "Description", "Slot"],
        ["", "", "", "AI"],
        ["", "", "", ""],
        ["", "", "", ""],
        ["C1", "North", "Valve rack", "2"],
        ["C2", "South", "Pump panel", "0"],
    ]
    view = build_view(grid, "equipment", FilterState(area="North"))
    assert view.header_rows[0] == ["Area", "Cabinet", "Description", "Slot"]
    assert view.facets.area_index == 0
    assert view.facets.cabinet_options == [ALL, "C1"]
    assert view.body.values.tolist() == [["North", "C1", "Valve rack", "2"]]
    # source grid is not modified
    assert grid[0][0] == "Cabinet"


def test_equipment_default_visibility(equipment_grid):
    view = build_view(equipment_grid, "equipment")
    # Slot 1 and Slot 2 carry positive counts, Spare does not
    assert view.visible_columns == {0, 1, 2, 3, 4}
    assert view.columns == [0, 1, 2, 3, 4]


def test_equipment_area_selection_hides_area_column(equipment_grid):
    view = build_view(equipment_grid, "equipment", FilterState(area="South"))
    assert view.area_filtered
    assert view.visible_columns == {0, 1, 2}
    assert view.columns == [1, 2]


def test_equipment_column_search(equipment_grid):
    view = build_view(equipment_grid, "equipment", FilterState(search="spare"))
    assert view.visible_columns == {0, 1, 2, 5}
    assert len(view.body) == 3


def test_header_labels_flatten_header_rows(equipment_grid):
    view = build_view(equipment_grid, "equipment")
    assert view.header_labels([0, 3, 5]) == ["Area", "Slot 1 / AI / rev A", "Spare"]


def test_duplicate_labels_are_made_unique():
    grid = [["Name", "Qty", "Qty", ""], ["a", "1", "2", "x"]]
    view = build_view(grid, "stock")
    assert view.header_labels([0, 1, 2, 3]) == ["Name", "Qty", "Qty (2)", "Column 4"]


def test_to_frame_and_export_frame(equipment_grid):
    view = build_view(equipment_grid, "equipment", FilterState(area="North"))
    shown = view.to_frame()
    exported = view.to_frame(for_export=True)
    assert "Area" not in shown.columns
    assert list(exported.columns)[:3] == ["Area", "Cabinet", "Description"]
    assert len(shown) == len(exported) == 2


def test_empty_messages(stock_grid):
    assert build_view(stock_grid[:1], "stock").empty_message == NO_DATA_MESSAGE
    view = build_view(stock_grid, "stock", FilterState(search="nothing"))
    assert not view.has_data
    assert view.empty_message == NO_MATCH_MESSAGE


def test_no_grid_is_total():
    view = build_view(None, "equipment")
    assert not view.has_data
    assert view.visible_columns is None
    assert view.columns == []


def test_ragged_rows_are_tolerated():
    grid = [["Name", "Type", "Qty"], ["Valve"], ["Pump", "Motor", "1", "extra"]]
    view = build_view(grid, "stock", FilterState(type="Motor"))
    assert view.body.values.tolist() == [["Pump", "Motor", "1"]]


def test_selected_type_missing_from_refreshed_grid(stock_grid):
    view = build_view(stock_grid, "stock", FilterState(type="Pump"))
    assert view.state.type == ALL
    assert len(view.body) == 4


def test_selected_area_missing_from_refreshed_grid(equipment_grid):
    view = build_view(equipment_grid, "equipment", FilterState(area="West", cabinet="C9", search="slot"))
    assert view.state == FilterState(search="slot")
    assert not view.area_filtered
    assert view.facets.cabinet_options == []
    assert len(view.body) == 3
    assert 0 in view.columns


def test_selected_cabinet_missing_keeps_area(equipment_grid):
    view = build_view(equipment_grid, "equipment", FilterState(area="North", cabinet="C3"))
    assert (view.state.area, view.state.cabinet) == ("North", ALL)
    assert view.body[1].tolist() == ["C1", "C2"]
