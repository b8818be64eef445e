"""Test config resolution and validation with Pydantic."""

import pytest
from pydantic import ValidationError

from rccm.schemas import ParamConfig, UserConfig, CLIConfig, InternalConfig, SCHEDULES
from rccm.schemas.resolve import resolve_config, deep_merge, expand_schedule
from rccm.schemas.user import UserReconstructionConfig

pytestmark = pytest.mark.unit


class TestConfigResolution:
    """Test resolve_config() precedence and merging."""

    def test_resolve_config_all_defaults(self):
        """Resolving with no overrides expands the production schedule."""
        config = resolve_config(ParamConfig(), None, None)

        assert isinstance(config, InternalConfig)
        assert config.reconstruction.schedule == "production"
        assert [(s.radius, s.min_evidence, s.mode) for s in config.reconstruction.stages] == [
            (1, 4, "strict"), (2, 12, "relaxed"), (2, 10, "relaxed"), (1, 3, "relaxed"),
        ]
        assert config.reconstruction.max_passes is None
        assert config.reconstruction.workers == 9
        assert config.global_.var_names.cloud_mask == "cloud_mask"
        assert config.logging.level == "INFO"

    def test_legacy_schedule_is_capped(self):
        config = resolve_config(ParamConfig(), UserConfig(schedule="legacy"), None)

        assert len(config.reconstruction.stages) == 3
        assert config.reconstruction.max_passes == 20

    def test_explicit_cap_overrides_schedule_cap(self):
        user = UserConfig(schedule="legacy", max_passes=40)
        config = resolve_config(ParamConfig(), user, None)

        assert config.reconstruction.max_passes == 40

    def test_explicit_stage_table_overrides_schedule(self):
        user = UserConfig(stages=[{"radius": 3, "min_evidence": 20, "mode": "heterogeneous"}])
        config = resolve_config(ParamConfig(), user, CLIConfig(schedule="legacy"))

        assert len(config.reconstruction.stages) == 1
        stage = config.reconstruction.stages[0]
        assert (stage.radius, stage.min_evidence, stage.mode) == (3, 20, "relaxed")

    def test_homogeneous_alias(self):
        user = UserConfig(stages=[{"radius": 1, "min_evidence": 4, "mode": "Homogeneous"}])
        config = resolve_config(ParamConfig(), user, None)

        assert config.reconstruction.stages[0].mode == "strict"

    def test_cli_overrides_user(self):
        user = UserConfig(workers=4, schedule="legacy")
        cli = CLIConfig(workers=1, log_level="DEBUG")
        config = resolve_config(ParamConfig(), user, cli)

        assert config.reconstruction.workers == 1
        assert config.reconstruction.schedule == "legacy"
        assert config.logging.level == "DEBUG"

    def test_nested_user_reconstruction(self):
        user = UserConfig(reconstruction=UserReconstructionConfig(schedule="LEGACY", workers=2))
        config = resolve_config(ParamConfig(), user, None)

        assert config.reconstruction.schedule == "legacy"
        assert config.reconstruction.workers == 2

    def test_accepts_plain_dicts(self):
        config = resolve_config({}, {"WORKERS": 3}, {"schedule": "legacy"})

        assert config.reconstruction.workers == 3
        assert config.reconstruction.schedule == "legacy"

    def test_schedule_table_not_shared(self):
        """Resolved configs must not alias the module-level schedule table."""
        resolve_config(ParamConfig(), None, None)
        assert SCHEDULES["production"]["stages"][0] == {"radius": 1, "min_evidence": 4, "mode": "strict"}


class TestUserConfigAliases:
    """Test UserConfig flat aliases map correctly."""

    def test_uppercase_keys(self):
        user = UserConfig.model_validate({
            "SCHEDULE": "legacy",
            "MAX_PASSES": 5,
            "MASK_VAR": "RCCM",
            "CAMERA_DIM": "cam",
            "SAVE_DIAGNOSTICS": False,
            "LOG_LEVEL": "warning",
        })
        config = resolve_config(ParamConfig(), user, None)

        assert config.reconstruction.schedule == "legacy"
        assert config.reconstruction.max_passes == 5
        assert config.global_.var_names.cloud_mask == "RCCM"
        assert config.global_.coord_names.camera == "cam"
        assert config.output.save_diagnostics is False
        assert config.logging.level == "WARNING"

    def test_unknown_user_keys_ignored(self):
        user = UserConfig.model_validate({"RADAR_ID": "KDIX", "WORKERS": 2})
        config = resolve_config(ParamConfig(), user, None)

        assert config.reconstruction.workers == 2

    def test_global_overrides(self):
        user = UserConfig.model_validate({"global": {"coord_names": {"line": "y", "sample": "x"}}})
        config = resolve_config(ParamConfig(), user, None)

        assert config.global_.coord_names.line == "y"
        assert config.global_.coord_names.sample == "x"
        assert config.global_.coord_names.camera == "camera"


class TestValidation:

    def test_zero_radius_rejected(self):
        user = UserConfig(stages=[{"radius": 0, "min_evidence": 4, "mode": "strict"}])
        with pytest.raises(ValidationError):
            resolve_config(ParamConfig(), user, None)

    def test_unknown_mode_rejected(self):
        user = UserConfig(stages=[{"radius": 1, "min_evidence": 4, "mode": "loose"}])
        with pytest.raises(ValidationError):
            resolve_config(ParamConfig(), user, None)

    def test_empty_stage_table_rejected(self):
        with pytest.raises(ValidationError):
            resolve_config(ParamConfig(), UserConfig(stages=[]), None)

    def test_unknown_schedule_rejected(self):
        with pytest.raises(ValidationError):
            CLIConfig(schedule="experimental")

    def test_unknown_user_schedule_rejected(self):
        with pytest.raises(ValidationError):
            UserConfig.model_validate({"SCHEDULE": "nightly"})

    def test_zero_workers_rejected(self):
        with pytest.raises(ValidationError):
            CLIConfig(workers=0)

    def test_param_config_forbids_extra(self):
        with pytest.raises(ValidationError):
            ParamConfig.model_validate({"downloader": {}})

    def test_internal_config_is_frozen(self):
        config = resolve_config(ParamConfig(), None, None)
        with pytest.raises(ValidationError):
            config.output = config.output


class TestMergeHelpers:

    def test_deep_merge_nested(self):
        base = {"a": 1, "b": {"c": 2, "d": 3}}
        assert deep_merge(base, {"b": {"d": 4}}, {"e": 5}) == {"a": 1, "b": {"c": 2, "d": 4}, "e": 5}

    def test_deep_merge_replaces_lists(self):
        assert deep_merge({"s": [1, 2]}, {"s": [3]}) == {"s": [3]}

    def test_expand_schedule_keeps_explicit_values(self):
        expanded = expand_schedule({"schedule": "legacy", "stages": None, "max_passes": 7, "workers": 1})

        assert len(expanded["stages"]) == 3
        assert expanded["max_passes"] == 7
