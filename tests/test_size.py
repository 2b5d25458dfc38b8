from imessagedb.size import format_file_size


def test_can_get_file_size_bytes():
    assert format_file_size(100) == "100.00 B"


def test_can_get_file_size_kb():
    assert format_file_size(2300) == "2.25 KB"


def test_can_get_file_size_mb():
    assert format_file_size(5612000) == "5.35 MB"


def test_can_get_file_size_gb():
    assert format_file_size(9234712394) == "8.60 GB"


def test_can_get_file_size_cap():
    assert format_file_size(2**64 - 1) == "16777216.00 TB"