import io

from agriseq.readers import FAOSTAT, MAPPING, read_csv, read_tsv, reader_for_role
from agriseq.readers.base import rows_from_fields
from agriseq.readers.csv_reader import CSVReader
from agriseq.readers.tsv_reader import TSVReader


def _write(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def test_csv_quoted_field_with_comma(tmp_path):
    path = _write(tmp_path, "t.csv", 'a,b,c\n1,"x,y",3\n')
    assert list(read_csv(path)) == [{"a": "1", "b": "x,y", "c": "3"}]


def test_csv_doubled_quote_escape(tmp_path):
    path = _write(tmp_path, "t.csv", 'a,b\n"say ""hi""",2\n')
    assert list(read_csv(path))[0]["a"] == 'say "hi"'


def test_csv_multiline_quoted_field(tmp_path):
    path = _write(tmp_path, "t.csv", 'a,b\n"line one\nline two",2\n3,4\n')
    rows = list(read_csv(path))
    assert len(rows) == 2
    assert rows[0]["a"] == "line one\nline two"
    assert rows[1] == {"a": "3", "b": "4"}


def test_csv_bom_and_whitespace(tmp_path, faostat_csv):
    path = _write(tmp_path, "fao.csv", faostat_csv)
    rows = list(read_csv(path))
    assert len(rows) == 2
    assert list(rows[0].keys())[0] == "Domain Code"
    assert rows[0]["Item"] == "Maize (corn)"
    assert rows[1]["Area"] == "Congo, Dem. Rep."


def test_short_rows_padded_and_extra_fields_dropped(tmp_path):
    path = _write(tmp_path, "t.csv", "a,b,c\n1\n1,2,3,4,5\n")
    rows = list(read_csv(path))
    assert rows[0] == {"a": "1", "b": "", "c": ""}
    assert rows[1] == {"a": "1", "b": "2", "c": "3"}


def test_header_is_first_non_blank_line(tmp_path):
    path = _write(tmp_path, "t.tsv", "\n\n  \nx\ty\n\n1\t2\n")
    assert list(read_tsv(path)) == [{"x": "1", "y": "2"}]


def test_tsv_keeps_quotes_literal(tmp_path):
    path = _write(tmp_path, "m.txt", 'name\tnote\nS1\t"quoted, text"\n')
    assert list(read_tsv(path))[0]["note"] == '"quoted, text"'


def test_tsv_mapping_file(tmp_path, mapping_tsv):
    path = _write(tmp_path, "map.txt", mapping_tsv)
    rows = list(read_tsv(path))
    assert [r["barcode"] for r in rows] == ["BC1", "BC2"]
    assert rows[0]["experiment_design_description"] == "soil survey"


def test_missing_file_yields_nothing(tmp_path, caplog):
    assert list(read_csv(tmp_path / "nope.csv")) == []
    assert list(read_tsv(tmp_path / "nope.txt")) == []
    assert "not found" in caplog.text


def test_reader_for_role():
    assert isinstance(reader_for_role(FAOSTAT), CSVReader)
    assert isinstance(reader_for_role(MAPPING), TSVReader)


def test_row_of_empty_fields_is_kept(tmp_path):
    path = _write(tmp_path, "t.csv", "a,b,c,d\n,,,\n1,2,3,4\n")
    rows = list(read_csv(path))
    assert rows[0] == {"a": "", "b": "", "c": "", "d": ""}
    assert rows[1]["d"] == "4"


def test_whitespace_only_line_is_blank(tmp_path):
    path = _write(tmp_path, "t.tsv", "x\ty\n \t \n1\t2\n")
    assert list(read_tsv(path)) == [{"x": "1", "y": "2"}]


def test_rows_from_fields_without_data_lines():
    assert list(rows_from_fields([["a", "b"]], ",")) == []


def test_tokenize_stream_directly():
    fields = list(CSVReader().tokenize(io.StringIO('a, "b,c" ,d\n')))
    assert fields == [["a", "b,c", "d"]]
