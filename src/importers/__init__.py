from .csv_importer import CsvTransactionImporter, TransactionParseError, TransactionRecord

__all__ = ["CsvTransactionImporter", "TransactionParseError", "TransactionRecord"]
