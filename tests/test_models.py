from agriseq.models import OUTPUT_COLUMNS, MergedRecord, MergeSummary


def test_to_dict_has_correct_keys():
    rec = MergedRecord(record_id="record_1", data_type="genomic_sequence")
    assert list(rec.to_dict().keys()) == OUTPUT_COLUMNS


def test_floats_rendered_two_decimals():
    rec = MergedRecord(record_id="record_1", data_type="genomic_sequence",
                       gc_content=50.0, quality_score_avg=33.333)
    d = rec.to_dict()
    assert d["gc_content"] == "50.00"
    assert d["quality_score_avg"] == "33.33"
    assert d["sequence_length"] == 0


def test_default_values():
    rec = MergedRecord(record_id="record_2", data_type="agricultural_statistics")
    assert rec.sequence_id == ""
    assert rec.has_ambiguous_bases == 0
    assert rec.sample_name == ""
    assert rec.year == ""


def test_summary_to_dict_excludes_detail():
    d = MergeSummary(total_records=3, min_length=5).to_dict()
    assert d["total_records"] == 3
    assert "min_length" not in d
    assert "by_type" not in d
