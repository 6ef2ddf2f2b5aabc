import tempfile
from os import path

from Bio import SeqIO
import pytest
from alnwindows.cli.root import run


def read_lines(file_path: str):
    with open(file_path) as handle:
        return handle.read().splitlines()

def test_extract_window_as_tab():
    with tempfile.TemporaryDirectory() as temp_dir:
        output_path = path.join(temp_dir, "window.tsv")
        status = run(["extract", "--input-file", "tests/resources/three_records.fasta",
                      "--start-position", "7", "--window-size", "4", "--out-file", output_path])
        assert status == 0
        assert read_lines(output_path) == ["TTAA\tconsensus", "....\t2", "..GG\t1"]

def test_extract_window_with_imputation():
    with tempfile.TemporaryDirectory() as temp_dir:
        output_path = path.join(temp_dir, "window.tsv")
        status = run(["extract", "--input-file", "tests/resources/missing_data.fasta", "--window-size", "6",
                      "--impute-missing", "--out-format", "TAB", "--out-file", output_path])
        assert status == 0
        assert read_lines(output_path) == ["ACGTTA\tconsensus", "......\t3", "...-..\t1"]

def test_extract_query_window_as_fasta():
    with tempfile.TemporaryDirectory() as temp_dir:
        output_path = path.join(temp_dir, "window.fasta")
        status = run(["extract", "--input-file", "tests/resources/four_records_multiline.fasta",
                      "--query-sequence", "tests/resources/query.fasta", "--out-format", "FASTA", "--out-file", output_path])
        assert status == 0
        records = list(SeqIO.parse(output_path, "fasta"))
    assert [record.id for record in records] == ["consensus", "query", "variant_1", "variant_2"]
    assert str(records[0].seq) == "AGGCTTACCGAT"
    assert str(records[1].seq) == "AGGCTTACCGAT"
    assert records[2].description == "variant_1 count=3"
    assert str(records[3].seq) == "AGGCTAACCGAT"

def test_scan_windows():
    with tempfile.TemporaryDirectory() as temp_dir:
        output_path = path.join(temp_dir, "diversity.tsv")
        status = run(["scan", "--input-file", "tests/resources/three_records.fasta",
                      "--window-size", "4", "--step-size", "2", "--out-file", output_path])
        assert status == 0
        assert read_lines(output_path) == ["position\tcount", "1\t3", "3\t3", "5\t3"]

def test_configuration_error_reports_usage(capsys):
    with tempfile.TemporaryDirectory() as temp_dir:
        status = run(["scan", "--input-file", "tests/resources/three_records.fasta",
                      "--window-size", "4", "--step-size", "0", "--out-file", path.join(temp_dir, "out.tsv")])
    captured = capsys.readouterr()
    assert status == 1
    assert "ERROR: Step size must be > 0." in captured.err
    assert "usage:" in captured.err

def test_format_error_reports_usage(capsys):
    with tempfile.TemporaryDirectory() as temp_dir:
        status = run(["extract", "--input-file", "tests/resources/empty.fasta",
                      "--window-size", "4", "--out-file", path.join(temp_dir, "out.tsv")])
    assert status == 1
    assert "ERROR:" in capsys.readouterr().err

def test_out_of_range_window_fails():
    with tempfile.TemporaryDirectory() as temp_dir:
        status = run(["extract", "--input-file", "tests/resources/three_records.fasta",
                      "--start-position", "9", "--window-size", "4", "--out-file", path.join(temp_dir, "out.tsv")])
    assert status == 1

@pytest.mark.parametrize("argv", [
    ["scan", "--input-file", "tests/resources/three_records.fasta", "--window-size", "4", "--out-file", "out.tsv"],
    ["extract", "--window-size", "4", "--out-file", "out.tsv"],
    ["extract", "--input-file", "tests/resources/three_records.fasta", "--window-size", "four", "--out-file", "out.tsv"],
    [],
])
def test_missing_or_malformed_flags_exit(argv):
    with pytest.raises(SystemExit) as exit_info:
        run(argv)
    assert exit_info.value.code != 0

def test_undecodable_input_reports_usage(capsys):
    with tempfile.TemporaryDirectory() as temp_dir:
        input_path = path.join(temp_dir, "binary.fasta")
        with open(input_path, "wb") as input_handle:
            input_handle.write(b">a\nAC\xffT\n>b\nACGT\n")
        status = run(["scan", "-i", input_path, "-w", "1", "-t", "1", "-o", path.join(temp_dir, "out.tsv")])
    assert status == 1
    assert "ERROR:" in capsys.readouterr().err
