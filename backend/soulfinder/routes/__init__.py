# Routes package init
"""
SoulFinder Backend: API Routes Package
=========================================

Route Inventory (auth: - none, B bearer, A admin):
    - health.py:            GET  /, GET /health                         -
    - profiles.py:          GET  /all-bio                               -
                            GET  /my-bio/{email}                        B
                            PATCH /edit-bio-data                        B
                            GET  /get-bio/{id} (alias /all-bio/{id})    B
                            GET  /similar-biodata/{type}                -
    - accounts.py:          POST /add-users                             -
                            GET  /all-users                             A
                            GET  /user-role/{email}                     B
                            PATCH /update-role/{email}                  A
    - favorites.py:         POST /favorite-bios/{email}                 -
                            DELETE /favorite-bios/{biodata_id}          B
                            GET  /favorite-bio                          -
                            GET  /my-favorites/{email}                  B
    - contact_requests.py:  POST /contact-req                           -
                            GET|DELETE /contact-req/{email}             B
                            GET  /contact-req                           A
                            PATCH /contact-req-approve/{id}             A
    - premium.py:           POST /premium-request/{email}               B
                            GET  /premium-request                       A
                            PATCH /premium-role-update/{email}          A
    - payments.py:          POST /create-payment-intent                 -
    - stats.py:             GET  /all-info                              A
    - stories.py:           GET  /success-stories                       -
                            POST /success-stories                       B

Routes stay thin: extract parameters, apply the auth dependency, call
one service method, return its result.
"""
