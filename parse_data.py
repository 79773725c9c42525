# parse_data.py
"""
Parse the books CSV and print basic stats without touching the database.
"""

from scripts.ingest import parse_books_csv, FILE_PATH


def main():
    books_list, stats = parse_books_csv(FILE_PATH)

    print(f"Total CSV rows read:   {stats['n_rows']}")
    print(f"Books parsed:          {stats['n_books']}")
    print(f"Rows with errors:      {stats['n_errors']}")
    print(f"Duplicate ISBNs:       {stats['n_duplicate_isbns']}")

    if stats["error_examples"]:
        print("\nExample errors:")
        for ex in stats["error_examples"]:
            print(f"- Row {ex['row_number']}: {ex['error']}")


if __name__ == "__main__":
    main()
