import pytest

from config import Config


class TestConfig:
    def test_defaults(self):
        cfg = Config.from_env({})
        assert (cfg.rows, cfg.cols) == (20, 20)
        assert cfg.speed == 5
        assert cfg.algorithm == "bfs"
        assert cfg.debug is False

    def test_env_overrides(self):
        cfg = Config.from_env({
            "PATHVIZ_ROWS": "15",
            "PATHVIZ_MAZE_WALL_PROB": "0.45",
            "PATHVIZ_DEBUG": "yes",
            "PATHVIZ_ALGORITHM": "astar",
        })
        assert cfg.rows == 15
        assert cfg.maze_wall_prob == 0.45
        assert cfg.debug is True
        assert cfg.algorithm == "astar"

    @pytest.mark.parametrize("env", [
        {"PATHVIZ_ROWS": "many"},
        {"PATHVIZ_DEBUG": "maybe"},
        {"PATHVIZ_SPEED": "11"},
        {"PATHVIZ_MAZE_WALL_PROB": "1.5"},
        {"PATHVIZ_MIN_SIZE": "30"},
    ])
    def test_bad_values(self, env):
        with pytest.raises(ValueError):
            Config.from_env(env)

    def test_clamp_size(self):
        cfg = Config()
        assert cfg.clamp_size(4) == 10
        assert cfg.clamp_size(40) == 25
        assert cfg.clamp_size("12") == 12
