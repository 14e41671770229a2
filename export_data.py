import os
import pathlib
from sqlalchemy import create_engine
from dotenv import load_dotenv
import pandas as pd

BASE_DIR = pathlib.Path(__file__).resolve().parent
ENV_PATH = BASE_DIR / ".env"

TABLES = {
    "users": "SELECT * FROM users ORDER BY id",
    "excuses": "SELECT * FROM excuses ORDER BY created_at",
    "notes": "SELECT * FROM notes ORDER BY created_at",
    "chat_messages": "SELECT * FROM chat_messages ORDER BY created_at",
    "rooms": "SELECT * FROM rooms ORDER BY id",
    "room_messages": "SELECT * FROM room_messages ORDER BY room_id, created_at",
}


def export_tables(engine, output_file):
    """Write every table into one Excel workbook, one sheet per table."""
    frames = {name: pd.read_sql(query, engine) for name, query in TABLES.items()}

    # Excel does not support tz-aware datetimes; keep the wall-clock value (UTC)
    for df in frames.values():
        for col in df.columns:
            if isinstance(df[col].dtype, pd.DatetimeTZDtype):
                df[col] = df[col].dt.tz_localize(None)

    with pd.ExcelWriter(output_file, engine="openpyxl") as writer:
        for name, df in frames.items():
            df.to_excel(writer, sheet_name=name, index=False)

    return frames


def main():
    load_dotenv(dotenv_path=ENV_PATH)
    database_url = os.getenv("DATABASE_URL", "sqlite:///backbencher.db")

    engine = create_engine(database_url)
    output_file = BASE_DIR / "backbencher_data.xlsx"
    frames = export_tables(engine, output_file)

    for name, df in frames.items():
        print(f"{name}: {len(df)} rows")
    print(f"Export complete! File saved as: {output_file}")


if __name__ == "__main__":
    main()
