#!/usr/bin/env python3
"""
Example usage of the lifeuniverse package.
"""

from lifeuniverse import Universe, PatternLibrary


def main():
    """Drive a universe the way a render loop would: draw, then tick."""
    universe = Universe(20, 20)

    library = PatternLibrary()
    glider = library.get_pattern("Glider")
    glider.apply_to_universe(universe, row_offset=8, column_offset=8)

    for _ in range(10):
        print(f"Generation {universe.generation}:")
        print(universe.render())
        universe.tick()

    # A renderer reads the raw buffer directly: one byte per cell, row-major
    cells = universe.get_cells()
    print(f"Buffer: {cells.nbytes} bytes, stride {universe.get_width()}, population {universe.population}")


if __name__ == "__main__":
    main()
