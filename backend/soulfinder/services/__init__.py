# Services package init
"""
SoulFinder Backend: Services Layer
=====================================

What:  Business logic between routes (HTTP) and MongoDB (persistence).
How:   Stateless singletons; every method receives the Motor database
       handle injected into the route.

Service Inventory:
    - ProfileService:        listing with filter + pagination, upsert-by-owner
    - AccountService:        login create-or-touch, roles, admin search
    - FavoriteService:       favorite toggle with the non-empty-set invariant
    - ContactRequestService: one-per-pair contact requests
    - PremiumService:        premium request and approval workflow
    - StatsService:          admin aggregate counts and revenue
    - SuccessStoryService:   success stories
    - TokenVerifier (abstract) / FirebaseTokenVerifier: bearer tokens
    - PaymentGateway (abstract) / StripePaymentGateway: payment intents
"""
