from hexprobe.domain.errors import IOFailureError
from hexprobe.services.probe.batch import ProbeBatchService
from hexprobe.services.probe.native_adapter import NativeProbeAdapter


def test_batch_tallies_each_outcome(write_file, media, tmp_path):
    paths = [
        write_file("a.mp3", media.mp3_frames(3)),
        write_file("b.png", media.png()),
        write_file("c.wav", b"RIFF"),           # degraded
        write_file("d.txt", b"nothing"),        # not supported
        tmp_path / "missing.ogg",               # missing
    ]
    items, report = ProbeBatchService(NativeProbeAdapter(), max_workers=3).run(paths)

    assert [i.path for i in items] == paths
    assert report.planned == 5
    assert report.probed_ok == 2
    assert report.degraded == 1
    assert report.not_supported == 1
    assert report.missing_files == 1
    assert report.errors == 0
    assert report.started_at is not None and report.finished_at >= report.started_at
    assert items[4].result is None
    assert items[4].error.kind == "NOT_FOUND"
    assert report.error_details == [(str(paths[4]), "File does not exist")]


class _FlakyProber:
    def __init__(self, inner):
        self.inner = inner

    def probe(self, path):
        if path.name.startswith("bad"):
            raise IOFailureError("disk went away", path=path)
        return self.inner.probe(path)


def test_batch_continues_after_a_failure(write_file, media):
    paths = [write_file("bad.wav", media.wav()), write_file("good.wav", media.wav())]
    items, report = ProbeBatchService(_FlakyProber(NativeProbeAdapter()), max_workers=2).run(paths)
    assert report.errors == 1
    assert report.probed_ok == 1
    assert items[0].error.message == "disk went away"
    assert items[1].result.duration_millis == 1000


def test_report_merge():
    from hexprobe.domain.dataclasses.reports import ProbeReport

    a = ProbeReport(planned=2, probed_ok=1, errors=1)
    a.add_error("/x", "boom")
    b = ProbeReport(planned=3, degraded=2, missing_files=1)
    merged = a.merge(b)
    assert merged is a
    assert (a.planned, a.probed_ok, a.degraded, a.missing_files, a.errors) == (5, 1, 2, 1, 1)
    assert a.as_dict()["error_details"] == [("/x", "boom")]
