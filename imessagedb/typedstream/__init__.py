"""Data model and reader for typedstream binary archives."""