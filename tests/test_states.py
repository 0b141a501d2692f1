import pytest

from planegame.identifiers import States
from planegame.states import State, StateStack


class Recorder(State):
    def __init__(self, stack, context, name, log, passes=True):
        super().__init__(stack, context)
        self.name = name
        self.log = log
        self.passes = passes
        log.append(("create", name))

    def draw(self):
        self.log.append(("draw", self.name))

    def update(self, dt):
        self.log.append(("update", self.name))
        return self.passes

    def handle_event(self, event):
        self.log.append(("event", self.name))
        return self.passes

    def on_activate(self):
        self.log.append(("activate", self.name))

    def on_destroy(self):
        self.log.append(("destroy", self.name))


class Switcher(State):
    def draw(self):
        pass

    def update(self, dt):
        return True

    def handle_event(self, event):
        self.request_stack_pop()
        self.request_stack_push(States.MENU)
        return True


def make_stack(log, bottom_passes=True, top_passes=True):
    context = State.Context()
    stack = StateStack(context)
    stack.register_state(States.TITLE, Recorder, "bottom", log, bottom_passes)
    stack.register_state(States.MENU, Recorder, "top", log, top_passes)
    return stack, context


def test_push_is_deferred_until_update():
    log = []
    stack, context = make_stack(log)
    stack.push_state(States.TITLE)
    assert stack.is_empty()
    stack.update(0.1)
    assert not stack.is_empty()
    assert log == [("create", "bottom")]
    assert stack.states[0].context is context


def test_update_runs_top_down_and_stops():
    log = []
    stack, _ = make_stack(log, top_passes=False)
    stack.push_state(States.TITLE)
    stack.push_state(States.MENU)
    stack.update(0.0)
    log.clear()
    stack.update(0.0)
    assert log == [("update", "top")]


def test_update_reaches_bottom_when_top_lets_through():
    log = []
    stack, _ = make_stack(log)
    stack.push_state(States.TITLE)
    stack.push_state(States.MENU)
    stack.update(0.0)
    log.clear()
    stack.update(0.0)
    assert log == [("update", "top"), ("update", "bottom")]


def test_draw_runs_bottom_up():
    log = []
    stack, _ = make_stack(log)
    stack.push_state(States.TITLE)
    stack.push_state(States.MENU)
    stack.update(0.0)
    log.clear()
    stack.draw()
    assert log == [("draw", "bottom"), ("draw", "top")]


def test_events_start_at_bottom_and_stop():
    log = []
    stack, _ = make_stack(log, bottom_passes=False)
    stack.push_state(States.TITLE)
    stack.push_state(States.MENU)
    stack.update(0.0)
    log.clear()
    stack.handle_event(None)
    assert log == [("event", "bottom")]


def test_pop_destroys_top_and_activates_next():
    log = []
    stack, _ = make_stack(log)
    stack.push_state(States.TITLE)
    stack.push_state(States.MENU)
    stack.update(0.0)
    log.clear()
    stack.pop_state()
    stack.update(0.0)
    assert ("destroy", "top") in log
    assert log[-1] == ("activate", "bottom")
    assert len(stack) == 1


def test_clear_destroys_everything():
    log = []
    stack, _ = make_stack(log)
    stack.push_state(States.TITLE)
    stack.push_state(States.MENU)
    stack.update(0.0)
    log.clear()
    stack.clear_states()
    stack.update(0.0)
    assert stack.is_empty()
    assert sorted(log) == [("destroy", "bottom"), ("destroy", "top")]


def test_unregistered_state_raises():
    stack = StateStack(State.Context())
    stack.push_state(States.GAME)
    with pytest.raises(KeyError):
        stack.update(0.0)


def test_pop_on_empty_stack_raises():
    stack = StateStack(State.Context())
    stack.pop_state()
    with pytest.raises(IndexError):
        stack.update(0.0)


def test_state_requests_reach_the_stack():
    log = []
    stack, _ = make_stack(log)
    stack.register_state(States.GAME, Switcher)
    stack.push_state(States.GAME)
    stack.update(0.0)
    assert isinstance(stack.states[0], Switcher)
    stack.handle_event(None)
    assert len(stack) == 1
    assert isinstance(stack.states[0], Recorder)
    assert stack.states[0].name == "top"