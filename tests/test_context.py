import threading

import pytest

from rootest import Context, getcontext, localcontext, setcontext


def test_context():
    ctx = Context()
    assert ctx.bracket_factor == 1.6
    assert ctx.bracket_tries == 50

    with pytest.raises(ValueError):
        Context(bracket_factor=1.0)

    with pytest.raises(ValueError):
        Context(bracket_tries=0)


def test_localcontext():
    before = getcontext()

    with localcontext(bracket_factor=2.0) as ctx:
        assert getcontext() is ctx
        assert ctx.bracket_factor == 2.0
        assert ctx.bracket_tries == before.bracket_tries

    assert getcontext() is before


def test_setcontext():
    def target():
        setcontext(Context(bracket_tries=3))
        results.append(getcontext().bracket_tries)

    results = []
    thread = threading.Thread(target=target)
    thread.start()
    thread.join()
    assert results == [3]
    assert getcontext().bracket_tries == 50

    with pytest.raises(TypeError):
        setcontext(None)  # type: ignore
