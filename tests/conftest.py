"""Shared fixtures for agriseq tests."""

import pytest
import requests

from agriseq.core import PipelineConfig
from agriseq.sources import SourceResolver


@pytest.fixture
def session():
    return requests.Session()


@pytest.fixture
def fastq_text():
    """Three reads: one clean, one with an ambiguous base, one low quality."""
    return (
        "@read1 sample=S1\n"
        "ACGTACGT\n"
        "+\n"
        "IIIIIIII\n"
        "@read2 BC1\n"
        "GGCCNNAT\n"
        "+\n"
        "########\n"
        "@read3\n"
        "AAAA\n"
        "+\n"
        "!!!!\n"
    )


@pytest.fixture
def faostat_csv():
    return (
        '\ufeffDomain Code,Domain,Area,Item,Element,Year,Unit,Value\n'
        'QCL,Crops and livestock products,Kenya,"Maize (corn)",Production,2022,t,3300000\n'
        'QCL,Crops and livestock products,"Congo, Dem. Rep.",Cassava,Yield,2021,kg/ha,8000\n'
        '\n'
    )


@pytest.fixture
def mapping_tsv():
    return (
        "sample_name\tbarcode\texperiment_design_description\ttarget_gene\tplatform\n"
        "S1\tBC1\tsoil survey\t16S rRNA\tIllumina\n"
        "S2\tBC2\troot survey\t16S rRNA\tIllumina\n"
    )


@pytest.fixture
def workspace(tmp_path, fastq_text, faostat_csv, mapping_tsv):
    """Work directory laid out like a real run with a pre-extracted archive."""
    extracted = tmp_path / "extracted_data" / "run1"
    extracted.mkdir(parents=True)
    (extracted / "sample.fastq").write_text(fastq_text, encoding="utf-8")
    (tmp_path / "FAOSTAT_data_en_6-23-2025.csv").write_text(faostat_csv, encoding="utf-8")
    mapping_dir = tmp_path / "mapping_files"
    mapping_dir.mkdir()
    (mapping_dir / "2097_mapping_file.txt").write_text(mapping_tsv, encoding="utf-8")
    return tmp_path


@pytest.fixture
def config(workspace):
    return PipelineConfig(work_dir=str(workspace), skip_extract=True)


@pytest.fixture
def resolver(tmp_path, session):
    return SourceResolver(tmp_path / "downloads", session=session)
