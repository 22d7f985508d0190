import pytest

from rhineutils.loc_target import (
    TARGET_APQ_SA,
    TARGET_MDM,
    TARGET_MPQ,
    TARGET_MSM_NO_SSC,
    TARGET_QCA1530,
    TARGET_UNDETECTED,
    TARGET_UNKNOWN,
    GnssTarget,
    SscType,
    TargetDetector,
    read_a_line,
    target_gnss_type,
    target_set,
)


def _write(root, system_path, text):
    path = root / system_path.lstrip("/")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    return path


def _props(values):
    def get(name, default):
        return values.get(name, default)
    return get


@pytest.mark.parametrize("gnss", list(GnssTarget))
@pytest.mark.parametrize("ssc", list(SscType))
def test_target_round_trip(gnss, ssc):
    code = target_set(gnss, ssc)
    assert target_gnss_type(code) == gnss
    assert code & 1 == ssc


def test_target_constants_are_distinct():
    codes = {TARGET_MDM, TARGET_APQ_SA, TARGET_MPQ, TARGET_MSM_NO_SSC,
             TARGET_QCA1530, TARGET_UNKNOWN}
    assert len(codes) == 6
    assert target_gnss_type(TARGET_MDM) == GnssTarget.MDM
    assert TARGET_MPQ == 0


def test_read_a_line_first_line(tmp_path):
    path = tmp_path / "f"
    path.write_text("first\nsecond\n")
    assert read_a_line(path) == "first\n"


def test_read_a_line_truncates(tmp_path):
    path = tmp_path / "f"
    path.write_text("abcdefgh\n")
    assert read_a_line(path, 4) == "abc"


def test_read_a_line_missing(tmp_path):
    with pytest.raises(OSError):
        read_a_line(tmp_path / "missing")


def test_qca1530_present(tmp_path):
    detector = TargetDetector(tmp_path, _props({"persist.qca1530": "yes"}))
    assert detector.is_qca1530() is True
    assert detector.detect() == TARGET_QCA1530


def test_qca1530_detection_in_progress_then_present(tmp_path):
    values = iter(["detect", "detect", "yes"])
    sleeps = []
    detector = TargetDetector(tmp_path, lambda name, default: next(values),
                              sleep=sleeps.append)
    assert detector.is_qca1530() is True
    assert sleeps == [1, 1]


def test_qca1530_detection_times_out(tmp_path):
    sleeps = []
    detector = TargetDetector(tmp_path, _props({"persist.qca1530": "detect"}),
                              sleep=sleeps.append)
    assert detector.is_qca1530() is False
    assert len(sleeps) == detector.detect_timeout


def test_qca1530_inaccessible(tmp_path):
    def broken(name, default):
        raise OSError("no properties")
    detector = TargetDetector(tmp_path, broken)
    assert detector.is_qca1530() is False


def test_apq_with_mpq_id(tmp_path):
    _write(tmp_path, "/sys/devices/soc0/soc_id", "130\n")
    detector = TargetDetector(tmp_path, _props({"ro.baseband": "apq"}))
    assert detector.detect() == TARGET_MPQ


def test_apq_with_other_id(tmp_path):
    _write(tmp_path, "/sys/devices/soc0/soc_id", "1300\n")
    detector = TargetDetector(tmp_path, _props({"ro.baseband": "apq"}))
    assert detector.detect() == TARGET_APQ_SA


def test_mtp_with_modem(tmp_path):
    _write(tmp_path, "/sys/devices/soc0/hw_platform", "MTP\n")
    _write(tmp_path, "/dev/mdm", "")
    detector = TargetDetector(tmp_path, _props({"ro.baseband": "msm"}))
    assert detector.detect() == TARGET_MDM


def test_surf_without_modem_is_undetected(tmp_path):
    _write(tmp_path, "/sys/devices/soc0/hw_platform", "Surf")
    detector = TargetDetector(tmp_path)
    assert detector.detect() == TARGET_UNDETECTED
    _write(tmp_path, "/dev/mdm", "")
    assert detector.detect() == TARGET_MDM


def test_msm8930_id_from_deprecated_path(tmp_path):
    _write(tmp_path, "/sys/devices/system/soc/soc0/id", "142\n")
    _write(tmp_path, "/sys/devices/system/soc/soc0/hw_platform", "Fluid\n")
    detector = TargetDetector(tmp_path)
    assert detector.detect() == TARGET_MSM_NO_SSC


def test_unknown_board(tmp_path):
    _write(tmp_path, "/sys/devices/soc0/soc_id", "126\n")
    detector = TargetDetector(tmp_path)
    assert detector.detect() == TARGET_UNKNOWN


def test_result_is_cached(tmp_path):
    soc = _write(tmp_path, "/sys/devices/soc0/soc_id", "116\n")
    detector = TargetDetector(tmp_path)
    assert detector.detect() == TARGET_MSM_NO_SSC
    soc.write_text("126\n")
    assert detector.detect() == TARGET_MSM_NO_SSC