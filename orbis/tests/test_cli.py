"""
Tests for the command-line interface.
"""

import argparse
import json

import pytest

from ..cli import cmd_draft, cmd_new


def test_new_prints_game(capsys):
    cmd_new(argparse.Namespace(players=["ann", "bob"], seed=1))

    data = json.loads(capsys.readouterr().out)
    assert data["round"] == 0
    assert data["players"] == ["ann", "bob"]


def test_new_rejects_single_player(capsys):
    with pytest.raises(SystemExit):
        cmd_new(argparse.Namespace(players=["solo"], seed=None))
    assert "Error" in capsys.readouterr().out


def test_draft_runs_snake_order(capsys):
    cmd_draft(argparse.Namespace(players=["ann", "bob", "cy"], seed=2))

    out = capsys.readouterr().out
    assert "Pick order: ann, bob, cy, cy, bob, ann" in out
    assert "Round: 1" in out
    assert "Phase: resource" in out
