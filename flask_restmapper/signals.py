from blinker import Namespace

_restmapper = Namespace()

before_create = _restmapper.signal('before-create')

after_create = _restmapper.signal('after-create')

before_update = _restmapper.signal('before-update')

after_update = _restmapper.signal('after-update')

before_delete = _restmapper.signal('before-delete')

after_delete = _restmapper.signal('after-delete')
