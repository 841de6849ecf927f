"""命令行入口测试"""

import pytest

from main import main


class TestCli:

    def test_heads_up(self, capsys):
        code = main(["--board", "2c 7d 9h Jc Ks", "--hand", "As Ad", "--hand", "Kd Qh", "--no-color"])
        out = capsys.readouterr().out
        assert code == 0
        assert "Player 1 Wins!" in out
        assert "One Pair" in out

    def test_named_split_pot(self, capsys):
        code = main([
            "--board", "Ah Ad Kc Kd Qs",
            "--hand", "3c 4h", "--hand", "5c 6h", "--hand", "7c 8h",
            "--name", "Ann", "--name", "Bo", "--name", "Cy",
            "--no-color",
        ])
        out = capsys.readouterr().out
        assert code == 0
        assert "It's a Tie (Split Pot)!" in out
        assert "Cy" in out

    def test_invalid_card(self, capsys):
        code = main(["--board", "2c 7d 9h Jc Kx", "--hand", "As Ad", "--hand", "Kd Qh"])
        assert code == 2
        assert "Kx" in capsys.readouterr().err

    def test_duplicate_card(self, capsys):
        code = main(["--board", "2c 7d 9h Jc Ks", "--hand", "As Ad", "--hand", "As Qh"])
        assert code == 2
        assert "Duplicate" in capsys.readouterr().err

    def test_event_callback_prints_headline(self, capsys):
        main(["--board", "2c 7d 9h Jc Ks", "--hand", "As Ad", "--hand", "Kd Qh", "--no-color"])
        assert "  >> Player 1 Wins!" in capsys.readouterr().out

    def test_hole_cards_shown_high_first(self, capsys):
        main(["--board", "2c 7d 9h Jc Ks", "--hand", "As Ad", "--hand", "Qh Kd", "--no-color"])
        assert "  Player 2: K♦ Q♥" in capsys.readouterr().out

    def test_log_level_choices(self, capsys):
        args = ["--board", "2c 7d 9h Jc Ks", "--hand", "As Ad", "--hand", "Kd Qh", "--no-color"]
        with pytest.raises(SystemExit) as exc:
            main(args + ["--log-level", "bogus"])
        assert exc.value.code == 2
        assert "--log-level" in capsys.readouterr().err
        assert main(args + ["--log-level", "debug"]) == 0
