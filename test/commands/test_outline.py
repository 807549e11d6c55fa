from sqlfront.commands import outline


def test_outline(tmp_path, capsys):
    source = tmp_path / "objects.sql"
    source.write_text(
        "CREATE TABLE SAMPLE.EMP (A INT);\n"
        "CREATE PROCEDURE RAISE() BEGIN DECLARE X INT; END;\n"
    )

    outline.main([str(source)])

    lines = capsys.readouterr().out.splitlines()
    assert [column.strip() for column in lines[0].split("|")] == [
        "statement",
        "create_type",
        "schema",
        "name",
        "start",
        "end",
    ]
    assert [column.strip() for column in lines[2].split("|")] == [
        "Create",
        "TABLE",
        "SAMPLE",
        "EMP",
        "0",
        "31",
    ]
    assert len(lines) == 5


def test_outline_max_rows(tmp_path, capsys):
    source = tmp_path / "objects.sql"
    source.write_text("DECLARE A INT; DECLARE B INT; DECLARE C INT;")

    outline.main(["--max-rows", "1", str(source)])

    assert capsys.readouterr().out.splitlines()[-1] == "... and 2 more rows"
