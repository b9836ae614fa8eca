import pytest

from ogbkit.input_bindings import KeyBindings

SPACEBAR = 32
GAMEPAD_A = 200
MOUSE_LEFT = 201


def test_codes_in_slot_order():
    binds = KeyBindings()
    binds.bind("dash", 1, GAMEPAD_A)
    binds.bind("dash", 0, SPACEBAR)
    assert binds.codes("dash") == (SPACEBAR, GAMEPAD_A)


def test_action_pressed_when_any_key_pressed():
    binds = KeyBindings()
    binds.bind("dash", 0, SPACEBAR)
    binds.bind("dash", 1, GAMEPAD_A)
    assert binds.is_action_just_pressed("dash", {GAMEPAD_A}.__contains__) is True
    assert binds.is_action_just_pressed("dash", {MOUSE_LEFT}.__contains__) is False


def test_unbound_action_is_never_pressed():
    calls = []
    binds = KeyBindings()
    assert binds.is_action_just_pressed("shoot", lambda code: calls.append(code) or True) is False
    assert calls == []


def test_empty_slots_are_not_queried():
    calls = []
    binds = KeyBindings()
    binds.bind("shoot", 2, MOUSE_LEFT)
    binds.is_action_just_pressed("shoot", lambda code: calls.append(code) or False)
    assert calls == [MOUSE_LEFT]


def test_rebinding_replaces_and_zero_clears():
    binds = KeyBindings()
    binds.bind("dash", 0, SPACEBAR)
    binds.bind("dash", 0, GAMEPAD_A)
    assert binds.codes("dash") == (GAMEPAD_A,)
    binds.bind("dash", 0, 0)
    assert binds.codes("dash") == ()


def test_slot_out_of_range():
    binds = KeyBindings(keys_per_binding=2)
    with pytest.raises(IndexError):
        binds.bind("dash", 2, SPACEBAR)
    with pytest.raises(IndexError):
        binds.bind("dash", -1, SPACEBAR)


def test_keys_per_binding_must_be_positive():
    with pytest.raises(ValueError):
        KeyBindings(keys_per_binding=0)