from imessagedb.output import done_processing, processing


def test_processing_writes_message(capsys):
    processing()
    assert capsys.readouterr().out == "\rProcessing..."


def test_done_processing_returns_carriage(capsys):
    done_processing()
    assert capsys.readouterr().out == "\r"


def test_sequence(capsys):
    processing()
    done_processing()
    out = capsys.readouterr().out
    assert out.startswith("\rProcessing...")
    assert out.endswith("\r")