from bridgeagg.db.models.transaction import ZERO_ADDRESS
from bridgeagg.domain.models.bridge import ExternalTransaction, TransactionRow, to_epoch_ms


def split_transaction(
    tx: ExternalTransaction,
    bridge_ids: dict[str, int],
) -> tuple[TransactionRow | None, TransactionRow | None]:
    """Source-side deposit row and destination-side withdrawal row for one transfer.

    A side whose chain has no bridge id is None.
    """
    source_chain = tx.chain_source.lower()
    destination_chain = tx.chain_destination.lower()
    ts = to_epoch_ms(tx.timestamp_source)
    token = tx.token or ZERO_ADDRESS
    eoa_from = tx.eoa_address_from or "0x"
    eoa_to = tx.eoa_address_to or "0x"

    source_row = None
    if bridge_ids.get(source_chain):
        source_row = TransactionRow(
            bridge_id=bridge_ids[source_chain],
            chain=source_chain,
            tx_hash=tx.tx_hash_source,
            ts=ts,
            tx_block=None,
            tx_from=eoa_from,
            tx_to=eoa_to,
            token=token,
            amount=tx.usd_amount,
            is_deposit=True,
            is_usd_volume=True,
            txs_counted_as=1,
            origin_chain=None,
        )

    destination_row = None
    if bridge_ids.get(destination_chain):
        destination_row = TransactionRow(
            bridge_id=bridge_ids[destination_chain],
            chain=destination_chain,
            tx_hash=tx.tx_hash_destination,
            ts=ts,
            tx_block=None,
            tx_from=eoa_to,
            tx_to=eoa_from,
            token=token,
            amount=tx.usd_amount,
            is_deposit=False,
            is_usd_volume=True,
            txs_counted_as=1,
            origin_chain=None,
        )

    return source_row, destination_row
