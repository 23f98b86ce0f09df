import os
from datetime import date

from flask import Flask, request, jsonify
import gspread
from gspread_dataframe import get_as_dataframe
from google.auth.exceptions import GoogleAuthError
from logic import find_top_collaboration, parse_rows

app = Flask(__name__)


def _read_sheet_rows(spreadsheet_id, sheet, cred_file):
    gc = gspread.service_account(filename=cred_file)
    sh = gc.open_by_key(spreadsheet_id)
    ws = sh.worksheet(sheet)
    df = get_as_dataframe(ws, evaluate_formulas=True, header=0, dtype=str).dropna(how="all").fillna("")
    return df.to_dict("records")


@app.route("/analyze", methods=["POST"])
def analyze_sheet():
    data = request.get_json(force=True, silent=True) or {}
    spreadsheet_id = data.get("spreadsheet_id")
    if not spreadsheet_id:
        return jsonify({"error": "spreadsheet_id is required"}), 400
    sheet = data.get("sheet", "assignments")
    cred_file = data.get("service_account_file", os.environ.get("GOOGLE_APPLICATION_CREDENTIALS", "service_account.json"))

    try:
        today = date.fromisoformat(data["today"]) if data.get("today") else date.today()
    except (TypeError, ValueError):
        return jsonify({"error": f"invalid today: {data.get('today')!r}"}), 400

    try:
        rows = _read_sheet_rows(spreadsheet_id, sheet, cred_file)
    except (gspread.exceptions.GSpreadException, GoogleAuthError, OSError, ValueError) as e:
        return jsonify({"error": f"could not read sheet '{sheet}': {e}"}), 502

    log_lines = []
    parsed = parse_rows(rows, log_func=log_lines.append)
    result = find_top_collaboration(parsed.records, today, log_func=log_lines.append)

    return jsonify({
        "rows_read": parsed.rows_read,
        "records": len(parsed.records),
        "today": today.isoformat(),
        "result": result.to_dict() if result is not None else None,
        "log": log_lines,
    })


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=8000)
