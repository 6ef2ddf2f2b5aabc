import tempfile
from os import path

from Bio import SeqIO
import pytest
from alnwindows.engine.exceptions.alignment import ConfigurationError
from alnwindows.engine.structures.alignment import AlignmentStatistics, WindowDiversity
from alnwindows.engine.writing import mark_differences, normalize_output_format, write_diversity_table, write_unique_sequences

UNIQUE_SEQUENCES = [("TTAA", 2), ("TTGG", 1)]


@pytest.mark.parametrize("sequence,consensus,expected", [
    ("TTAA", "TTAA", "...."),
    ("TTGG", "TTAA", "..GG"),
    ("TTG", "TTAA", "..G"),
    ("TTAAC", "TTAA", "....C"),
])
def test_mark_differences(sequence: str, consensus: str, expected: str):
    assert mark_differences(sequence, consensus) == expected

@pytest.mark.parametrize("out_format,expected", [("TAB", "tab"), ("tab", "tab"), ("Fasta", "fasta")])
def test_output_format_case_insensitive(out_format: str, expected: str):
    assert normalize_output_format(out_format) == expected

def test_unknown_output_format_fails():
    with pytest.raises(ConfigurationError):
        normalize_output_format("csv")

def test_unique_sequences_as_tab():
    with tempfile.TemporaryDirectory() as temp_dir:
        output_path = path.join(temp_dir, "out.tsv")
        write_unique_sequences(UNIQUE_SEQUENCES, "TTAA", "TAB", output_path)
        with open(output_path) as output_handle:
            lines = output_handle.read().splitlines()
    assert lines == ["TTAA\tconsensus", "....\t2", "..GG\t1"]

def test_unique_sequences_as_tab_with_query():
    with tempfile.TemporaryDirectory() as temp_dir:
        output_path = path.join(temp_dir, "out.tsv")
        write_unique_sequences(UNIQUE_SEQUENCES, "TTAA", "tab", output_path, "TCAA", AlignmentStatistics(6, 4, 0, 4))
        with open(output_path) as output_handle:
            lines = output_handle.read().splitlines()
    assert lines == ["TTAA\tconsensus", ".C..\tquery", "....\t2", "..GG\t1"]

def test_unique_sequences_as_fasta():
    with tempfile.TemporaryDirectory() as temp_dir:
        output_path = path.join(temp_dir, "out.fasta")
        write_unique_sequences(UNIQUE_SEQUENCES, "TTAA", "fasta", output_path, "TCAA", AlignmentStatistics(6, 4, 0, 4))
        records = list(SeqIO.parse(output_path, "fasta"))
    assert [record.id for record in records] == ["consensus", "query", "variant_1", "variant_2"]
    assert [str(record.seq) for record in records] == ["TTAA", "TCAA", "TTAA", "TTGG"]
    assert records[1].description == "query reference_start=7 reference_length=4 query_start=1 query_length=4"
    assert records[2].description == "variant_1 count=2"
    assert records[3].description == "variant_2 count=1"

def test_diversity_table():
    diversity = [WindowDiversity(0, (3,)), WindowDiversity(2, (2, 1))]
    with tempfile.TemporaryDirectory() as temp_dir:
        output_path = path.join(temp_dir, "diversity.tsv")
        write_diversity_table(diversity, output_path)
        with open(output_path) as output_handle:
            lines = output_handle.read().splitlines()
    assert lines == ["position\tcount", "1\t3", "3\t2", "3\t1"]
