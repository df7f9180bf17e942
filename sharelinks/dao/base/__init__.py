from sharelinks.dao.base.share_link_base_dao import ShareLinkBaseDAO


__all__ = [
    'ShareLinkBaseDAO',
]
