import pytest
import yaml

from retention_model.config.loaders import (
    ConfigLoadError,
    load_scenario_config,
    load_scenario_directory,
    load_yaml_config,
    parse_scenario,
)
from retention_model.config.models import ScenarioConfig

pytestmark = [pytest.mark.unit, pytest.mark.config]


def write_yaml(path, data):
    path.write_text(yaml.safe_dump(data))
    return path


@pytest.fixture
def scenario_data(reference_payload):
    return {
        "mode": "cost",
        "company_inputs": reference_payload,
        "simulation": {"iterations": 500, "seed": 3},
    }


def test_load_scenario_uses_file_stem_as_name(tmp_path, scenario_data):
    path = write_yaml(tmp_path / "pilot.yaml", scenario_data)
    scenario = load_scenario_config(path)
    assert isinstance(scenario, ScenarioConfig)
    assert scenario.name == "pilot"
    assert scenario.mode == "cost"
    assert scenario.company_inputs.number_of_stores == 100
    assert scenario.simulation.iterations == 500
    assert scenario.simulation.seed == 3
    assert scenario.simulation.perturbation == 0.1


def test_explicit_name_wins(tmp_path, scenario_data):
    scenario_data["name"] = "Q3 pilot"
    path = write_yaml(tmp_path / "pilot.yaml", scenario_data)
    assert load_scenario_config(path).name == "Q3 pilot"


def test_extends_merges_company_inputs(tmp_path, scenario_data):
    write_yaml(tmp_path / "base.yaml", scenario_data)
    child = write_yaml(
        tmp_path / "child.yaml",
        {"extends": "base.yaml", "company_inputs": {"retention_improvement": 0.2}},
    )
    scenario = load_scenario_config(child)
    assert scenario.company_inputs.retention_improvement == 0.2
    assert scenario.company_inputs.number_of_stores == 100
    assert scenario.name == "child"


def test_missing_file(tmp_path):
    with pytest.raises(ConfigLoadError):
        load_yaml_config(tmp_path / "absent.yaml")


def test_missing_parent_is_config_error(tmp_path):
    path = write_yaml(tmp_path / "child.yaml", {"extends": "nope.yaml"})
    with pytest.raises(ConfigLoadError):
        load_yaml_config(path)


def test_unparsable_yaml(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("company_inputs: [unclosed\n")
    with pytest.raises(ConfigLoadError):
        load_yaml_config(path)


def test_non_mapping_yaml(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n")
    with pytest.raises(ConfigLoadError):
        load_yaml_config(path)


def test_schema_rejects_bad_mode(scenario_data):
    scenario_data["mode"] = "forecast"
    with pytest.raises(ConfigLoadError, match="validation failed"):
        parse_scenario(scenario_data)


def test_schema_requires_company_inputs():
    with pytest.raises(ConfigLoadError):
        parse_scenario({"mode": "cost"})


def test_schema_rejects_zero_iterations(scenario_data):
    scenario_data["simulation"]["iterations"] = 0
    with pytest.raises(ConfigLoadError):
        parse_scenario(scenario_data)


def test_pydantic_errors_are_wrapped(scenario_data):
    del scenario_data["company_inputs"]["number_of_stores"]
    with pytest.raises(ConfigLoadError, match="Invalid scenario values"):
        parse_scenario(scenario_data)


def test_null_sections_fall_back_to_defaults(scenario_data):
    scenario_data["estimations"] = None
    scenario_data["simulation"] = None
    scenario = parse_scenario(scenario_data, default_name="nulls")
    assert scenario.name == "nulls"
    assert scenario.simulation.iterations == 10_000


def test_circular_extends_is_config_error(tmp_path, scenario_data):
    write_yaml(tmp_path / "a.yaml", {**scenario_data, "extends": "b.yaml"})
    write_yaml(tmp_path / "b.yaml", {**scenario_data, "extends": "a.yaml"})
    with pytest.raises(ConfigLoadError, match="Circular"):
        load_scenario_config(tmp_path / "a.yaml")


def test_load_scenario_directory(tmp_path, scenario_data):
    write_yaml(tmp_path / "base.yaml", scenario_data)
    write_yaml(
        tmp_path / "stretch.yaml",
        {"extends": "base.yaml", "name": "stretch", "company_inputs": {"retention_improvement": 0.25}},
    )
    scenarios = load_scenario_directory(tmp_path)
    assert list(scenarios) == ["base", "stretch"]
    assert scenarios["base"].name == "base"
    assert scenarios["stretch"].company_inputs.retention_improvement == 0.25
    assert scenarios["stretch"].mode == "cost"


def test_directory_errors_name_the_scenario(tmp_path, scenario_data):
    write_yaml(tmp_path / "good.yaml", scenario_data)
    write_yaml(tmp_path / "bad.yaml", {**scenario_data, "mode": "forecast"})
    with pytest.raises(ConfigLoadError, match="'bad'"):
        load_scenario_directory(tmp_path)


def test_missing_or_empty_directory(tmp_path):
    with pytest.raises(ConfigLoadError):
        load_scenario_directory(tmp_path / "absent")
    with pytest.raises(ConfigLoadError, match="No scenario files"):
        load_scenario_directory(tmp_path)
