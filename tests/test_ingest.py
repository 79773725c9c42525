from scripts.ingest import load_into_db, parse_books_csv, row_to_payload

HEADER = "ISBN,AmazonUrl,Author,Language,Pages,Publisher,Title,Year\n"


def _write_csv(tmp_path, *rows):
    path = tmp_path / "books.csv"
    path.write_text(HEADER + "".join(row + "\n" for row in rows))
    return str(path)


def test_row_to_payload_skips_blank_cells():
    row = {
        "ISBN": " 1234567890 ",
        "AmazonUrl": "",
        "Author": "John Doe",
        "Language": None,
        "Pages": "250",
        "Publisher": "",
        "Title": "Testing",
        "Year": "",
    }
    assert row_to_payload(row) == {
        "isbn": "1234567890",
        "author": "John Doe",
        "pages": 250,
        "title": "Testing",
    }


def test_parse_books_csv_stats(tmp_path):
    path = _write_csv(
        tmp_path,
        "1234567890,https://www.amazon.com/dp/1234567890,John Doe,English,250,Acme,Testing,2023",
        "invalid,,John Doe,English,250,Acme,Bad isbn,2023",
        "0987654321,,Jane Doe,Spanish,many,Acme,Bad pages,2024",
        "1234567890,,John Doe,English,260,Acme,Testing (2nd ed),2024",
    )

    books_list, stats = parse_books_csv(path)

    assert stats["n_rows"] == 4
    assert stats["n_books"] == 2
    assert stats["n_errors"] == 2
    assert [ex["row_number"] for ex in stats["error_examples"]] == [2, 3]
    assert stats["n_duplicate_isbns"] == 1
    assert books_list[0]["amazon_url"] == "https://www.amazon.com/dp/1234567890"


def test_load_into_db_upserts_by_isbn(tmp_path, store):
    path = _write_csv(
        tmp_path,
        "1234567890,,John Doe,English,250,Acme,Testing,2023",
        "0987654321,,Jane Doe,Spanish,300,Acme,Testing 2.0,2024",
    )
    books_list, _ = parse_books_csv(path)
    load_into_db(books_list, store.engine)

    first = store.find_by_isbn("1234567890")

    path = _write_csv(
        tmp_path,
        "1234567890,,John Doe,English,260,Acme,Testing (2nd ed),2024",
    )
    books_list, _ = parse_books_csv(path)
    load_into_db(books_list, store.engine)

    again = store.find_by_isbn("1234567890")
    assert again["id"] == first["id"]
    assert again["pages"] == 260
    assert again["title"] == "Testing (2nd ed)"
    assert len(store.list_all()) == 2
