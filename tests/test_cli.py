import json

import pytest

from ngineer.cli import main
from ngineer.dc_circuits import DC_CIRCUIT, RESISTOR, VOLTAGE_SOURCE
from ngineer.study import NodalAnalysisStudyBuilder


@pytest.fixture
def circuit_file(tmp_path):
    model_json = (
        NodalAnalysisStudyBuilder(DC_CIRCUIT)
        .add_nodes(4)
        .configure_node(0, [0.0], True, None)
        .add_element(VOLTAGE_SOURCE, 0, 1, [3.0])
        .add_element(RESISTOR, 1, 2, [2.0])
        .add_element(RESISTOR, 2, 3, [1.0])
        .add_element(RESISTOR, 3, 0, [1.0])
        .save_model()
    )
    path = tmp_path / "circuit.json"
    path.write_text(model_json, encoding="utf-8")
    return path


def test_solves_model_and_writes_solution(circuit_file):
    assert main([str(circuit_file)]) == 0
    soln = json.loads((circuit_file.parent / "circuit.soln.json").read_text())
    assert soln["nodes"]["0"] == [0.0]
    assert soln["nodes"]["1"][0] == pytest.approx(3.0)
    assert soln["nodes"]["2"][0] == pytest.approx(1.5, abs=1e-3)
    currents = [soln["elements"][f"resistor.{i}"][0] for i in (1, 2, 3)]
    assert currents[0] == pytest.approx(currents[1], abs=1e-3)
    assert currents[1] == pytest.approx(currents[2], abs=1e-3)
    assert set(soln["elements"]) == {
        "voltage_source.0",
        "resistor.1",
        "resistor.2",
        "resistor.3",
    }


def test_precision_and_iterations_are_echoed(circuit_file, capsys):
    assert main([str(circuit_file), "-p", "0.001", "--iterations", "50"]) == 0
    out = capsys.readouterr().out
    assert "[neapolitan]......... solver precision is: 0.001" in out
    assert "[neapolitan]......... solver iteration limit is: 50" in out


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "absent.json")]) == 1
    out = capsys.readouterr().out
    assert "[neapolitan].....ERR: could not find the specified filepath!" in out


def test_bad_precision(circuit_file, capsys):
    assert main([str(circuit_file), "--precision", "tiny"]) == 1
    assert "failed to parse precision argument!" in capsys.readouterr().out
    assert not (circuit_file.parent / "circuit.soln.json").exists()


def test_bad_iteration_limit(circuit_file, capsys):
    assert main([str(circuit_file), "-i", "-3"]) == 1
    assert "failed to parse iteration limit argument!" in capsys.readouterr().out


def test_invalid_model_json(tmp_path, capsys):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    assert main([str(path)]) == 1
    assert "failed to read model from json file!" in capsys.readouterr().out


def test_solver_failure_is_reported(circuit_file, capsys):
    assert main([str(circuit_file), "-i", "0"]) == 1
    assert "failed to solve the given model!" in capsys.readouterr().out
    assert not (circuit_file.parent / "circuit.soln.json").exists()


def test_no_arguments_fails(capsys):
    assert main([]) == 1
    assert "ERR" in capsys.readouterr().out