import json

from reduced_tsp.cli import main, successors

RAGGED_DAT = "param dist : 1 2 :=\n1 0 4 5\n2 3 0\n;\n"


def test_successors():
    assert successors([0, 3, 1, 2]) == [3, 2, 0, 1]


def test_single_file(matrix_a_dat, capsys):
    assert main(['--file', matrix_a_dat]) == 0
    out = capsys.readouterr().out
    assert 'a4.dat' in out
    assert '30.00' in out
    assert 'method=reduction' in out


def test_show_path(matrix_a_dat, capsys):
    main(['--file', matrix_a_dat, '--show-path'])
    assert "0 --[9]--> 3 --[6]--> 1 --[8]--> 2 --[7]--> 0" in capsys.readouterr().out


def test_json_output(matrix_a_dat, capsys):
    assert main(['--file', matrix_a_dat, '--json', '--ls', '2opt']) == 0
    results = json.loads(capsys.readouterr().out)
    assert len(results) == 1
    assert results[0]['tour'] == [0, 3, 1, 2]
    assert results[0]['cost'] == 30
    assert results[0]['method'] == 'reduction_2opt'


def test_trace_prints_tables(matrix_a_dat, capsys):
    main(['--file', matrix_a_dat, '--trace'])
    out = capsys.readouterr().out
    assert '[initial] iteration 0' in out
    assert '[committed] iteration 3 edge 0 -> 3' in out


def test_directory_run_with_errors_and_skips(tmp_path, matrix_a_dat, capsys):
    (tmp_path / 'ragged.dat').write_text(RAGGED_DAT)
    assert main(['--data-dir', str(tmp_path), '--all', '--summary']) == 0
    out = capsys.readouterr().out
    assert 'ragged.dat' in out and 'ERROR' in out
    assert 'Summary:' in out

    assert main(['--data-dir', str(tmp_path), '--pattern', 'a*.dat', '--max-n', '4']) == 0
    assert 'a4.dat (n=4)' in capsys.readouterr().out


def test_only_errors_returns_failure(tmp_path):
    (tmp_path / 'ragged.dat').write_text(RAGGED_DAT)
    assert main(['--file', str(tmp_path / 'ragged.dat')]) == 1


def test_reduction_failure_is_reported_and_nearest_still_solves(reused_source_dat, capsys):
    assert main(['--file', reused_source_dat]) == 1
    assert 'ERROR Edges reuse an endpoint' in capsys.readouterr().out

    assert main(['--file', reused_source_dat, '--method', 'nearest']) == 0
    assert 'method=nearest_neighbor' in capsys.readouterr().out
