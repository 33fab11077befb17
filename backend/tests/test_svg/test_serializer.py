"""Tests for descriptor formatting and scaling."""

from pathedit.svg.parser import Command
from pathedit.svg.serializer import format_command, format_number, format_path, scale_path


def test_format_number():
    assert format_number(1.0) == "1"
    assert format_number(2.5) == "2.5"
    assert format_number(-3.25) == "-3.25"
    assert format_number(1 / 3, 3) == "0.333"
    assert format_number(-0.0000001) == "0"
    assert format_number(0.0) == "0"


def test_format_command():
    assert format_command(Command("Z")) == "Z"
    assert format_command(Command("L", (10.0, -0.5))) == "L 10 -0.5"


def test_format_path():
    commands = [Command("M", (0.0, 0.0)), Command("L", (10.0, 0.0)), Command("Z")]
    assert format_path(commands) == "M 0 0 L 10 0 Z"


def test_scale_path_coordinates():
    assert scale_path("M 1 2 L 3 4", 2) == "M 2 4 L 6 8"
    assert scale_path("m1 2 h 5 v-1", 2) == "m 2 4 h 10 v -2"


def test_scale_path_arc_keeps_rotation_and_flags():
    assert scale_path("M0 0 A 5 5 30 0 1 10 0", 2) == "M 0 0 A 10 10 30 0 1 20 0"


def test_scale_path_inverse():
    assert scale_path(scale_path("M 3 6 L 9 12 Z", 0.5), 2) == "M 3 6 L 9 12 Z"
