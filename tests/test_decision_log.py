"""Tests for the decision observers."""
from peppa.decision_log import ConsoleObserver, DecisionEvent, FileObserver, RecordingObserver
from peppa.players import CalculatingPlayer

from cards import cards


def test_event_format():
    event = DecisionEvent(source="calculating", phase="pass", chosen=["Q_spades", "A_hearts"],
                          rationale="defensive", scores={"Q_spades": 1000})
    assert event.format() == "calculating pass defensive -> Q_spades, A_hearts [Q_spades:1000]"


def test_event_format_with_player_and_details():
    event = DecisionEvent(source="oracle", phase="fallback", player_id=2,
                          rationale="OracleTimeout", details={"elapsed_ms": 50})
    assert event.format() == "oracle fallback p=2 OracleTimeout -> - elapsed_ms=50"


def test_file_observer_appends_lines(tmp_path):
    observer = FileObserver("test", logs_dir=str(tmp_path))
    player = CalculatingPlayer(observer=observer)
    player.select_pass_cards(cards("Qs Ah 2c 9c Kd 5h 6c"))
    player.select_pass_cards(cards("4c 5d 6s 4d"))

    with open(observer.path, encoding="utf-8") as f:
        lines = f.read().splitlines()
    assert len(lines) == 2
    assert lines[0].startswith("calculating pass defensive -> Q_spades, A_hearts, 5_hearts")


def test_console_observer(capsys):
    ConsoleObserver().notify(DecisionEvent(source="sacrifice", phase="move", chosen=["2_clubs"],
                                           rationale="forced"))
    assert capsys.readouterr().out == "[sacrifice] sacrifice move forced -> 2_clubs\n"


def test_recording_observer_by_phase():
    recorder = RecordingObserver()
    recorder.notify(DecisionEvent(source="a", phase="pass"))
    recorder.notify(DecisionEvent(source="a", phase="move"))
    assert [e.phase for e in recorder.by_phase("move")] == ["move"]
