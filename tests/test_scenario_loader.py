import pytest
import yaml
from retention_model.scenario_loader import CircularExtendsError, deep_merge, load


def test_simple_load_file(tmp_path):
    # simple scenario, no extends
    cfg = {"name": "solo", "company_inputs": {"number_of_stores": 12}}
    f = tmp_path / "simple.yaml"
    f.write_text(yaml.safe_dump(cfg))
    assert load(str(f)) == cfg


def test_load_directory(tmp_path):
    # two scenario files in dir
    cfg1 = {"mode": "cost"}
    f1 = tmp_path / "one.yaml"
    f1.write_text(yaml.safe_dump(cfg1))
    cfg2 = {"mode": "revenue"}
    f2 = tmp_path / "two.yml"
    f2.write_text(yaml.safe_dump(cfg2))
    result = load(str(tmp_path))
    assert result == {"one": cfg1, "two": cfg2}


def test_extends_deep_merge(tmp_path):
    # grandparent -> parent -> child
    gp = tmp_path / "gp.yaml"
    gp_cfg = {"mode": "cost", "company_inputs": {"number_of_stores": 10}}
    gp.write_text(yaml.safe_dump(gp_cfg))
    p = tmp_path / "parent.yaml"
    p_cfg = {
        "extends": "gp.yaml",
        "company_inputs": {"number_of_stores": 20, "training_weeks": 4},
        "estimations": {"seasonality_factor": 0.1},
    }
    p.write_text(yaml.safe_dump(p_cfg))
    c = tmp_path / "child.yaml"
    c_cfg = {"extends": "parent.yaml", "company_inputs": {"hours_per_week": 30}, "name": "c"}
    c.write_text(yaml.safe_dump(c_cfg))
    merged = load(str(c))
    expected = {
        "mode": "cost",
        "company_inputs": {"number_of_stores": 20, "training_weeks": 4, "hours_per_week": 30},
        "estimations": {"seasonality_factor": 0.1},
        "name": "c",
    }
    assert merged == expected


def test_directory_resolves_extends(tmp_path):
    (tmp_path / "base.yaml").write_text(yaml.safe_dump({"simulation": {"iterations": 100, "seed": 1}}))
    (tmp_path / "fast.yaml").write_text(yaml.safe_dump({"extends": "base.yaml", "simulation": {"iterations": 10}}))
    result = load(str(tmp_path))
    assert result["fast"] == {"simulation": {"iterations": 10, "seed": 1}}
    assert result["base"] == {"simulation": {"iterations": 100, "seed": 1}}


def test_circular_extends_in_directory(tmp_path):
    (tmp_path / "a.yaml").write_text(yaml.safe_dump({"extends": "b.yaml"}))
    (tmp_path / "b.yaml").write_text(yaml.safe_dump({"extends": "a.yaml"}))
    with pytest.raises(ValueError, match="Circular"):
        load(str(tmp_path))


def test_circular_extends_in_file(tmp_path):
    (tmp_path / "a.yaml").write_text(yaml.safe_dump({"extends": "b.yaml", "name": "a"}))
    (tmp_path / "b.yaml").write_text(yaml.safe_dump({"extends": "a.yaml", "name": "b"}))
    with pytest.raises(CircularExtendsError):
        load(str(tmp_path / "a.yaml"))


def test_self_extends(tmp_path):
    f = tmp_path / "loop.yaml"
    f.write_text(yaml.safe_dump({"extends": "loop.yaml"}))
    with pytest.raises(ValueError, match="Circular"):
        load(str(f))


def test_parent_suffix_is_optional(tmp_path):
    (tmp_path / "base.yaml").write_text(yaml.safe_dump({"mode": "cost", "name": "base"}))
    (tmp_path / "child.yaml").write_text(yaml.safe_dump({"extends": "base", "name": "child"}))
    assert load(str(tmp_path / "child.yaml")) == {"mode": "cost", "name": "child"}


def test_directory_ignores_other_files(tmp_path):
    (tmp_path / "one.yaml").write_text(yaml.safe_dump({"mode": "cost"}))
    (tmp_path / "notes.txt").write_text("not a scenario")
    assert load(str(tmp_path)) == {"one": {"mode": "cost"}}


def test_missing_parent_error(tmp_path):
    f = tmp_path / "child.yaml"
    # extends a non-existent file
    f.write_text(yaml.safe_dump({"extends": "nope.yaml", "name": "orphan"}))
    with pytest.raises(FileNotFoundError):
        load(str(f))


def test_deep_merge_does_not_alias_override():
    override = {"company_inputs": {"number_of_stores": 5}}
    merged = deep_merge({}, override)
    merged["company_inputs"]["number_of_stores"] = 99
    assert override["company_inputs"]["number_of_stores"] == 5
