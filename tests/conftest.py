"""Shared fixtures for the analyzer tests."""

import pytest

SAMPLE = '''\
/** Exercises every production of the grammar. */
class Main {
    static boolean test;    // class variable
    field int x, y;

    function void main() {
        var SquareGame game;
        var Array a;
        var int i, sum;
        let game = SquareGame.new();
        do game.run();
        let a = Array.new(3);
        let i = 0;
        while (i < 3) {
            let a[i] = i * 2;   /* array store */
            let i = i + 1;
        }
        if (~(sum = 0)) {
            do Output.printString("sum > 0 & done // not a comment");
        } else {
            let sum = -1;
        }
        do game.dispose();
        return;
    }

    method int get(int k, char c) {
        return x[k] + y;
    }
}
'''


@pytest.fixture
def sample_source() -> str:
    return SAMPLE


@pytest.fixture
def jack_file(tmp_path):
    path = tmp_path / "Main.jack"
    path.write_text(SAMPLE)
    return path
