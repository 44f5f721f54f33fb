import pytest

from agriseq.cli import build_parser, config_from_args, main


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.archive is None
    assert args.match_strategy is None
    assert args.skip_extract is False
    assert args.verbose is False


def test_parser_options():
    args = build_parser().parse_args([
        "--faostat", "fao.csv", "--mapping", "map.tsv", "-o", "out.csv",
        "--match", "exact", "--skip-extract", "-v",
    ])
    assert args.faostat == "fao.csv"
    assert args.mapping == "map.tsv"
    assert args.output == "out.csv"
    assert args.match_strategy == "exact"
    assert args.skip_extract is True
    assert args.verbose is True


def test_parser_rejects_unknown_strategy():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--match", "fuzzy"])


def test_config_from_args_keeps_defaults(monkeypatch):
    monkeypatch.delenv("AGRISEQ_WORK_DIR", raising=False)
    cfg = config_from_args(build_parser().parse_args(["-o", "x.csv"]))
    assert cfg.output == "x.csv"
    assert cfg.faostat == "FAOSTAT_data_en_6-23-2025.csv"
    assert cfg.match_strategy == "substring"
    assert cfg.skip_extract is False
    assert cfg.work_dir == "."


def test_main_success(workspace, capsys):
    main(["--work-dir", str(workspace), "--skip-extract"])
    out = capsys.readouterr().out
    assert "Total Records: 5" in out
    assert "Genomic Sequences: 3" in out
    assert (workspace / "MODEL_TRAINING_DATA.csv").is_file()


def test_main_no_data_exits_nonzero(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--work-dir", str(tmp_path), "--skip-extract"])
    assert exc.value.code == 1
    assert "No sequence or FAOSTAT records" in capsys.readouterr().err
