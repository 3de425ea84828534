import os

class dotdict(dict):
    """dot.notation access to dictionary attributes"""
    __getattr__ = dict.get
    __setattr__ = dict.__setitem__
    __delattr__ = dict.__delitem__

POSTGRES_PORT = os.getenv('POSTGRES_PORT', default='5432')
POSTGRES_USER = os.getenv('POSTGRES_USER')

Environment = os.getenv('LAUNCHLIST_ENV', default='development')
Config = {
  'development': dotdict({
    'connectionString'         : os.getenv('DATABASE_URL', default='sqlite:///./launchlist.db'),
    'jwtSecret'                : os.getenv('JWT_SECRET_KEY', default='launchlist-development-secret'),
    'accessTokenExpireMinutes' : int(os.getenv('ACCESS_TOKEN_EXPIRE_MINUTES', default='120')),
    'corsOrigins'              : ['*'],
    'debug'                    : True,
    'auditRequests'            : False,
    'activityLimit'            : 200, # rows in the activity feed
    'maxUploadBytes'           : 2*1024*1024, # csv import
  }),
  'production': dotdict({
    'connectionString'         : os.getenv('DATABASE_URL', default=f"postgresql://{POSTGRES_USER}:{os.getenv('POSTGRES_PASSWORD')}@{os.getenv('POSTGRES_HOST')}:{POSTGRES_PORT}/{os.getenv('POSTGRES_DBNM')}"),
    'jwtSecret'                : os.getenv('JWT_SECRET_KEY'),
    'accessTokenExpireMinutes' : int(os.getenv('ACCESS_TOKEN_EXPIRE_MINUTES', default='120')),
    'corsOrigins'              : [o.strip() for o in os.getenv('CORS_ORIGINS', default='*').split(',')],
    'debug'                    : False,
    'auditRequests'            : True,
    'activityLimit'            : 200,
    'maxUploadBytes'           : 2*1024*1024,
  })
}
