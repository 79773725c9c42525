# load_data.py
"""
Load the books CSV into the database, upserting by ISBN.
"""

from scripts.ingest import parse_books_csv, load_into_db, FILE_PATH


def main():
    books_list, stats = parse_books_csv(FILE_PATH)
    load_into_db(books_list)

    print("Load complete.")
    print(f"Total CSV rows read:   {stats['n_rows']}")
    print(f"Books loaded:          {stats['n_books']}")
    print(f"Rows with errors:      {stats['n_errors']}")


if __name__ == "__main__":
    main()
