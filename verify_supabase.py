"""
Verify the LeatherCraft HQ tables exist and are accessible.
Run: python verify_supabase.py
"""
import sys

from leathercraft_hq.config import load_settings
from supabase_service import get_supabase_client

settings = load_settings()
client = get_supabase_client(settings)

if client is None:
    print("ERROR: SUPABASE_URL and SUPABASE_KEY must be set in .env")
    sys.exit(1)

TABLES = {
    "orders":    "Customer orders with line items",
    "products":  "Product catalogue (name, color, price)",
    "inventory": "Raw material stock levels",
    "expenses":  "Expenses, including the automatic shipping record",
}

print("=" * 60)
print("Supabase Table Verification")
print("=" * 60)

all_ok = True
for table, desc in TABLES.items():
    try:
        resp = client.table(table).select("*", count="exact").limit(1).execute()
        count = resp.count if resp.count is not None else "?"
        print(f"  {'OK':12s} {table:12s} ({count} rows visible) — {desc}")
    except Exception as e:
        code = str(getattr(e, "code", "") or e)
        if "PGRST205" in code:
            status = "MISSING"
        elif "42501" in code:
            status = "NO ACCESS"
        else:
            status = "ERROR"
        print(f"  {status:12s} {table:12s} — {desc}")
        all_ok = False

print("=" * 60)

if all_ok:
    print("All tables OK! Rows are per-user, so counts only include rows you can see.")
else:
    print("\nSome tables are MISSING or blocked. Run the SQL in supabase_schema.sql")
    print("in your Supabase Dashboard → SQL Editor → New query → Paste → Run")
    sys.exit(1)
