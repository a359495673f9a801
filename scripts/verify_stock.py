"""
Verify stock_balance against a replay of stock_ledger.

    python scripts/verify_stock.py

Exits with status 1 when any (product, warehouse) quantity differs from the
sum of its ledger movements.
"""
import sys
import os
sys.path.append(os.getcwd())

from zaiko.core import SessionLocal
from zaiko.models import StockBalance, StockLedger
from zaiko.services import StockLedgerStore

def main() -> int:
    db = SessionLocal()
    try:
        ledger = StockLedgerStore(db)
        balances = db.query(StockBalance).all()
        
        print("=" * 70)
        print("STOCK VERIFICATION: balance vs ledger replay")
        print("=" * 70)
        
        mismatches = 0
        for balance in balances:
            replayed = ledger.replay_quantity(balance.product_id, balance.warehouse_id)
            if replayed != balance.quantity:
                mismatches += 1
                print(
                    f"  MISMATCH product={balance.product_id} warehouse={balance.warehouse_id} "
                    f"balance={balance.quantity} ledger={replayed}"
                )
        
        # Ledger pairs that never produced a balance row
        pairs = db.query(StockLedger.product_id, StockLedger.warehouse_id).distinct().all()
        known = {(b.product_id, b.warehouse_id) for b in balances}
        orphans = [p for p in pairs if (p[0], p[1]) not in known]
        for product_id, warehouse_id in orphans:
            mismatches += 1
            print(f"  MISSING BALANCE product={product_id} warehouse={warehouse_id}")
        
        print("-" * 50)
        print(f"Checked {len(balances)} balances, {ledger.count()} ledger entries")
        print(f"Result: {'OK' if mismatches == 0 else f'{mismatches} problem(s)'}")
        return 0 if mismatches == 0 else 1
    finally:
        db.close()

if __name__ == "__main__":
    sys.exit(main())
