"""Тесты файловой очереди печати print_spool.py."""

from pricelabel.services.print_spool import PrintJob, PrintSpool


def make_job(format_id: str = "standard_30") -> PrintJob:
    return PrintJob(
        title="Price Labels",
        document="<!DOCTYPE html><html></html>",
        format_id=format_id,
        label_count=3,
        page_count=1,
    )


class TestPrintSpool:
    """Документ складывается HTML файлом."""

    def test_submit_writes_document(self, tmp_path):
        spool = PrintSpool(tmp_path / "spool")

        spooled = spool.submit(make_job())

        assert spooled.path.exists()
        assert spooled.path.suffix == ".html"
        assert "standard_30" in spooled.path.name
        assert spooled.path.read_text(encoding="utf-8") == "<!DOCTYPE html><html></html>"
        assert spooled.label_count == 3

    def test_list_jobs(self, tmp_path):
        spool = PrintSpool(tmp_path)

        spool.submit(make_job("standard_30"))
        spool.submit(make_job("thermal_78x25"))

        assert len(spool.list_jobs()) == 2

    def test_list_jobs_without_directory(self, tmp_path):
        assert PrintSpool(tmp_path / "missing").list_jobs() == []
