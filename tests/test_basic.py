"""Basic tests for the lifeuniverse package."""

from lifeuniverse import Cell, Universe, PatternLibrary


def test_universe_creation():
    """Test basic universe creation and cell operations."""
    universe = Universe(10, 10)
    assert universe.width == 10
    assert universe.height == 10
    assert universe.is_alive(0, 0) is False

    universe.toggle_cell(5, 5)
    assert universe.is_alive(5, 5) is True
    assert universe.get_cells()[55] == Cell.ALIVE


def test_pattern_library():
    """Test pattern library has some patterns."""
    library = PatternLibrary()
    patterns = library.list_patterns()
    assert len(patterns) > 0
    assert "Glider" in patterns


def test_blinker_scenario():
    """Test the blinker flips to vertical and back on a 6x6 universe."""
    universe = Universe(6, 6)
    universe.toggle_cell(2, 1)
    universe.toggle_cell(2, 2)
    universe.toggle_cell(2, 3)

    universe.tick()
    assert universe.alive_cells() == [(1, 2), (2, 2), (3, 2)]

    universe.tick()
    assert universe.alive_cells() == [(2, 1), (2, 2), (2, 3)]
