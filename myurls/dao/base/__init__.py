from myurls.dao.base.store_base_dao import KeyValueStoreBaseDAO


__all__ = [
    'KeyValueStoreBaseDAO',
]
