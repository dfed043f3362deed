"""
End-to-end test of the CLI on a saved page and a local CV file.
"""
import json

import run_extract

from conftest import JOBSDB_HTML


def test_cli_writes_summary(tmp_path):
    html_file = tmp_path / "posting.html"
    html_file.write_text(JOBSDB_HTML, encoding="utf-8")
    cv_file = tmp_path / "cv.pdf"
    cv_file.write_bytes(b"%PDF-1.7\n" + b"1" * 3000)
    out = tmp_path / "out" / "summary.json"

    code = run_extract.main([
        "--html-file", str(html_file),
        "--page-url", "https://hk.jobsdb.com/job/81234567",
        "--cv", str(cv_file),
        "--out", str(out),
    ])

    assert code == 0
    summary = json.loads(out.read_text(encoding="utf-8"))
    assert summary["extractor"] == "jobsdb"
    assert summary["job"]["title"] == "Backend Engineer"
    assert summary["file"] == {
        "name": "cv.pdf",
        "size": 3009,
        "mimeType": "application/pdf",
        "encodedLength": 4012,
    }
    assert summary["metadata"]["source"] == "jobsdb-extension"


def test_cli_reports_extraction_failure(tmp_path, capsys):
    html_file = tmp_path / "empty.html"
    html_file.write_text("<p>hello</p>", encoding="utf-8")

    code = run_extract.main(["--html-file", str(html_file), "--out", str(tmp_path / "x.json")])

    assert code == 1
    assert "retry" in capsys.readouterr().err
    assert not (tmp_path / "x.json").exists()
